#!/usr/bin/python3
# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-

"""Tests for shade_matching.cli - the makemeup-match command."""

import json
import os


def test_match_catalog(capsys, catalog_json):
    """Matching prints the JSON match set."""
    from makemeup.shade_matching.cli import main

    code = main(['#F1C27D', '--catalog', catalog_json, '--lighting', 'daylight', '-n', '2'])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data['ok'] is True
    assert len(data['top_matches']) == 2
    assert data['top_matches'][0]['hex'] == '#F1C27D'


def test_explicit_lighting(capsys, catalog_csv):
    """--cct and --cri override config lighting."""
    from makemeup.shade_matching.cli import main

    code = main(['#8D5524', '--catalog', catalog_csv, '--cct', '6500', '--cri', '100', '-n', '1'])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data['top_matches'][0]['score'] == 0.0


def test_catalog_from_config(capsys, tmp_path, catalog_json):
    """The catalog path and penalty mode can come from a config file."""
    from makemeup.shade_matching.cli import main

    config_path = os.path.join(str(tmp_path), 'config.json')
    with open(config_path, 'w') as f:
        json.dump({'catalog_path': catalog_json, 'default_n_results': 1}, f)

    code = main(['#F1C27D', '--config', config_path, '--penalty-mode', 'corrected'])

    assert code == 0
    assert len(json.loads(capsys.readouterr().out)['top_matches']) == 1


def test_invalid_hex(capsys, catalog_json):
    """A malformed hex exits 1 with an error on stderr."""
    from makemeup.shade_matching.cli import main

    code = main(['#XYZ', '--catalog', catalog_json])

    assert code == 1
    error = json.loads(capsys.readouterr().err)
    assert error['ok'] is False
    assert 'Invalid hex' in error['error']


def test_missing_catalog(capsys):
    """Matching without a catalog exits 1."""
    from makemeup.shade_matching.cli import main

    assert main(['#F1C27D']) == 1
    assert 'Catalog unavailable' in capsys.readouterr().err


def test_pigments(capsys):
    """--pigments prints the recreated swatch and recipe."""
    from makemeup.shade_matching.cli import main

    assert main(['#000000', '--pigments']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['hex'] == '#8A3324'
    assert data['isRecreated'] is True


def test_analyze(capsys):
    """--analyze prints the skin-tone analysis."""
    from makemeup.shade_matching.cli import main

    assert main(['#F1C27D', '--analyze']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['undertone'] == 'warm'
    assert data['skin_undertone'] == 'warm'


def test_missing_config_file(capsys, tmp_path):
    """A config path that does not exist exits 1 with an error."""
    from makemeup.shade_matching.cli import main

    code = main(['#F1C27D', '--config', os.path.join(str(tmp_path), 'missing.json')])

    assert code == 1
    error = json.loads(capsys.readouterr().err)
    assert error['ok'] is False
    assert 'missing.json' in error['error']


def test_paired(capsys, catalog_json):
    """--secondary prints paired matches and recommendation groups."""
    from makemeup.shade_matching.cli import main

    code = main(['#F1C27D', '--secondary', '#E0AC69', '--catalog', catalog_json,
                 '--lighting', 'daylight', '-n', '3'])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data['ok'] is True
    assert len(data['pairs']) == 3
    assert data['pairs'][0]['same_product'] is True
    assert data['analysis']['secondary']['hex'] == '#E0AC69'
    assert data['groups']
