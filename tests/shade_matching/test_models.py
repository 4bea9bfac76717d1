#!/usr/bin/python3
# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-

"""Tests for shade_matching.models - catalog entries and match results."""

import dataclasses
import unittest


class TestCatalogEntry(unittest.TestCase):
    """Tests for CatalogEntry."""

    def test_from_upstream_row(self):
        """Upstream column names map onto entry fields."""
        from makemeup.shade_matching.models import CatalogEntry

        entry = CatalogEntry.from_row({
            'brand': 'MAC',
            'product': 'Studio Fix Fluid',
            'name': 'NC30',
            'hex': '#E0AC69',
            'url': 'https://example.com/nc30',
            'imgSrc': 'https://example.com/nc30.png',
        })
        self.assertEqual(entry.shade_name, 'NC30')
        self.assertEqual(entry.image, 'https://example.com/nc30.png')
        self.assertEqual(entry.hex, '#E0AC69')

    def test_blank_hex_becomes_none(self):
        """Empty or whitespace hex values are stored as None."""
        from makemeup.shade_matching.models import CatalogEntry

        self.assertIsNone(CatalogEntry.from_row({'brand': 'B', 'product': 'P', 'hex': '  '}).hex)
        self.assertIsNone(CatalogEntry.from_row({'brand': 'B', 'product': 'P'}).hex)

    def test_numeric_labels_become_strings(self):
        """A bare shade number from a JSON export is stored as text."""
        from makemeup.shade_matching.models import CatalogEntry
        from makemeup.shade_matching.undertone import Undertone, undertone_from_shade_name

        entry = CatalogEntry.from_row(
            {'brand': 'Fenty', 'product': 'Pro', 'name': 420, 'specific': 3, 'hex': '#C68642'}
        )
        self.assertEqual(entry.shade_name, '420')
        self.assertEqual(entry.specific, '3')
        self.assertEqual(undertone_from_shade_name(entry.label), Undertone.NEUTRAL)

    def test_label_falls_back_to_specific(self):
        """label uses specific when shade_name is empty."""
        from makemeup.shade_matching.models import CatalogEntry

        self.assertEqual(CatalogEntry('B', 'P', shade_name='Sand').label, 'Sand')
        self.assertEqual(CatalogEntry('B', 'P', specific='Golden 3').label, 'Golden 3')
        self.assertEqual(CatalogEntry('B', 'P').label, '')

    def test_entries_are_immutable(self):
        """Catalog entries cannot be modified."""
        from makemeup.shade_matching.models import CatalogEntry

        entry = CatalogEntry('B', 'P', hex='#FFFFFF')
        with self.assertRaises(dataclasses.FrozenInstanceError):
            entry.hex = '#000000'

    def test_to_dict_roundtrip(self):
        """to_dict output rebuilds the same entry."""
        from makemeup.shade_matching.models import CatalogEntry

        entry = CatalogEntry('B', 'P', shade_name='N1', hex='#E5C19E', url='u', image='i')
        self.assertEqual(CatalogEntry.from_row(entry.to_dict()), entry)


class TestMatchResults(unittest.TestCase):
    """Tests for MatchResult and MatchSet serialisation."""

    def _result(self, score=0.01):
        from makemeup.shade_matching.color_science import hex_to_oklab
        from makemeup.shade_matching.models import CatalogEntry, MatchResult
        from makemeup.shade_matching.undertone import Undertone

        entry = CatalogEntry('MAC', 'Studio Fix', shade_name='NC30', hex='#E0AC69',
                             url='https://example.com', image='https://example.com/i.png')
        return MatchResult(entry=entry, color=hex_to_oklab('#E0AC69'), distance=score,
                           undertone=Undertone.WARM, score=score)

    def test_result_to_dict(self):
        """Match results serialise to the client shape."""
        data = self._result().to_dict()

        self.assertEqual(
            set(data),
            {'brand', 'product', 'shade_name', 'hex', 'undertone', 'url', 'img', 'score'},
        )
        self.assertEqual(data['undertone'], 'warm')
        self.assertEqual(data['img'], 'https://example.com/i.png')

    def test_match_set_to_dict(self):
        """MatchSet serialises with ok=True and both lists."""
        from makemeup.shade_matching.models import MatchSet

        match_set = MatchSet(top_matches=[self._result()], perimeter_options=[])
        data = match_set.to_dict()
        self.assertTrue(data['ok'])
        self.assertEqual(len(data['top_matches']), 1)
        self.assertEqual(data['perimeter_options'], [])

    def test_best(self):
        """best is the first top match, or None."""
        from makemeup.shade_matching.models import MatchSet

        self.assertIsNone(MatchSet().best)
        result = self._result()
        self.assertIs(MatchSet(top_matches=[result]).best, result)


if __name__ == '__main__':
    unittest.main()
