#!/usr/bin/python3
# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-

"""Tests for shade_matching.config - MatchConfig."""

import json
import os
import shutil
import tempfile
import unittest


class TestMatchConfig(unittest.TestCase):
    """Tests for MatchConfig defaults, validation and serialisation."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_defaults(self):
        """Defaults match typical indoor capture and five results."""
        from makemeup.shade_matching.config import MatchConfig

        config = MatchConfig()
        self.assertEqual(config.default_cct_k, 4000.0)
        self.assertEqual(config.default_cri, 80.0)
        self.assertEqual(config.default_n_results, 5)
        self.assertEqual(config.perimeter_min_delta_l, 0.03)
        self.assertEqual(config.perimeter_max_delta_l, 0.12)
        self.assertEqual(config.perimeter_count, 3)
        self.assertEqual(config.undertone_penalty_mode, 'literal')
        self.assertEqual(config.paired_limit, 20)
        self.assertIsNone(config.catalog_path)

    def test_invalid_penalty_mode(self):
        """Unknown penalty modes are rejected."""
        from makemeup.shade_matching.config import MatchConfig

        with self.assertRaises(ValueError):
            MatchConfig(undertone_penalty_mode='strict')

    def test_inverted_perimeter_window(self):
        """perimeter_min_delta_l may not exceed perimeter_max_delta_l."""
        from makemeup.shade_matching.config import MatchConfig

        with self.assertRaises(ValueError):
            MatchConfig(perimeter_min_delta_l=0.2, perimeter_max_delta_l=0.1)

    def test_dict_roundtrip(self):
        """to_dict/from_dict preserve every field."""
        from makemeup.shade_matching.config import MatchConfig

        config = MatchConfig(default_cct_k=3000.0, undertone_penalty_mode='corrected', max_workers=2)
        self.assertEqual(MatchConfig.from_dict(config.to_dict()), config)

    def test_from_dict_ignores_unknown_keys(self):
        """Unknown keys are dropped, missing keys use defaults."""
        from makemeup.shade_matching.config import MatchConfig

        config = MatchConfig.from_dict({'default_n_results': 8, 'theme': 'dark'})
        self.assertEqual(config.default_n_results, 8)
        self.assertEqual(config.default_cri, 80.0)

    def test_from_file(self):
        """Config loads from a JSON file."""
        from makemeup.shade_matching.config import MatchConfig

        path = os.path.join(self.temp_dir, 'config.json')
        with open(path, 'w') as f:
            json.dump({'perimeter_count': 5, 'catalog_path': '/data/catalog.db'}, f)

        config = MatchConfig.from_file(path)
        self.assertEqual(config.perimeter_count, 5)
        self.assertEqual(config.catalog_path, '/data/catalog.db')

    def test_from_file_rejects_non_object(self):
        """A JSON list is not a valid config."""
        from makemeup.shade_matching.config import MatchConfig

        path = os.path.join(self.temp_dir, 'config.json')
        with open(path, 'w') as f:
            json.dump([1, 2, 3], f)

        with self.assertRaises(ValueError):
            MatchConfig.from_file(path)


if __name__ == '__main__':
    unittest.main()
