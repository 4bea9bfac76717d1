# tests/shade_matching/conftest.py
"""Shared fixtures for shade matching tests."""

import csv
import json
import os

import pytest

CATALOG_ROWS = [
    {'brand': 'MAC', 'product': 'Studio Fix Fluid', 'name': 'NC15', 'hex': '#FFDBAC',
     'url': 'https://example.com/mac/nc15', 'imgSrc': 'https://example.com/mac/nc15.png'},
    {'brand': 'MAC', 'product': 'Studio Fix Fluid', 'name': 'NC30', 'hex': '#F1C27D',
     'url': 'https://example.com/mac/nc30', 'imgSrc': 'https://example.com/mac/nc30.png'},
    {'brand': 'MAC', 'product': 'Studio Fix Fluid', 'name': 'NW35', 'hex': '#E0AC69',
     'url': 'https://example.com/mac/nw35', 'imgSrc': None},
    {'brand': 'Fenty', 'product': "Pro Filt'r", 'name': 'Golden 420', 'hex': '#C68642',
     'url': 'https://example.com/fenty/420', 'imgSrc': None},
    {'brand': 'Fenty', 'product': "Pro Filt'r", 'name': 'Deep 490', 'hex': '#8D5524',
     'url': 'https://example.com/fenty/490', 'imgSrc': None},
    {'brand': 'Fenty', 'product': "Pro Filt'r", 'name': 'Unreleased', 'hex': None,
     'url': None, 'imgSrc': None},
]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "api: tests that exercise the HTTP API"
    )


@pytest.fixture
def catalog_rows():
    """Upstream catalog rows, one without a hex."""
    return [dict(row) for row in CATALOG_ROWS]


@pytest.fixture
def catalog_entries(catalog_rows):
    """CatalogEntry objects built from the sample rows."""
    from makemeup.shade_matching.catalog import rows_to_entries
    return rows_to_entries(catalog_rows)


@pytest.fixture
def catalog_json(tmp_path, catalog_rows):
    """Path to a JSON catalog export."""
    path = os.path.join(str(tmp_path), 'catalog.json')
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(catalog_rows, f)
    return path


@pytest.fixture
def catalog_csv(tmp_path, catalog_rows):
    """Path to a CSV catalog export."""
    path = os.path.join(str(tmp_path), 'catalog.csv')
    fieldnames = ['brand', 'product', 'name', 'hex', 'url', 'imgSrc']
    with open(path, 'w', encoding='utf-8', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in catalog_rows:
            writer.writerow({k: row[k] or '' for k in fieldnames})
    return path


class StaticCatalog:
    """In-memory catalog source."""

    def __init__(self, entries):
        self.entries = list(entries)
        self.calls = 0

    def get_entries(self, limit=None):
        self.calls += 1
        return self.entries[:limit] if limit else list(self.entries)


class BrokenCatalog:
    """Catalog source whose reads always fail."""

    def get_entries(self, limit=None):
        from makemeup.shade_matching.errors import CatalogUnavailableError
        raise CatalogUnavailableError("Catalog unavailable: connection refused")


@pytest.fixture
def static_catalog(catalog_entries):
    """In-memory catalog source holding the sample entries."""
    return StaticCatalog(catalog_entries)


@pytest.fixture
def broken_catalog():
    """Catalog source that always fails."""
    return BrokenCatalog()
