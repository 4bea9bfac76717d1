#!/usr/bin/python3
# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-

"""Tests for shade_matching.ranking.perimeter - darker perimeter shades."""

import unittest


def _match(lightness, score, undertone=None, name='Shade'):
    from makemeup.shade_matching.color_science import PerceptualColor
    from makemeup.shade_matching.models import CatalogEntry, MatchResult
    from makemeup.shade_matching.undertone import Undertone

    return MatchResult(
        entry=CatalogEntry('Brand', 'Line', shade_name=name, hex='#808080'),
        color=PerceptualColor(lightness, 0.01, 0.02),
        distance=score,
        undertone=undertone or Undertone.NEUTRAL,
        score=score,
    )


class TestIsPerimeterCandidate(unittest.TestCase):
    """Tests for the lightness window."""

    def test_window(self):
        """Only shades 0.03-0.12 darker qualify."""
        from makemeup.shade_matching.ranking.perimeter import is_perimeter_candidate

        self.assertTrue(is_perimeter_candidate(0.6, 0.50))
        self.assertFalse(is_perimeter_candidate(0.6, 0.58))
        self.assertFalse(is_perimeter_candidate(0.6, 0.40))
        self.assertFalse(is_perimeter_candidate(0.6, 0.65))

    def test_bounds_inclusive(self):
        """Both ends of the window are inclusive."""
        from makemeup.shade_matching.ranking.perimeter import is_perimeter_candidate

        self.assertTrue(is_perimeter_candidate(0.5, 0.375, min_delta_l=0.125, max_delta_l=0.25))
        self.assertTrue(is_perimeter_candidate(0.5, 0.25, min_delta_l=0.125, max_delta_l=0.25))


class TestSelectPerimeterOptions(unittest.TestCase):
    """Tests for select_perimeter_options."""

    def test_filters_by_lightness(self):
        """Shades outside the window are excluded."""
        from makemeup.shade_matching.ranking.perimeter import select_perimeter_options

        base = _match(0.6, 0.0, name='Base')
        inside = _match(0.50, 0.2, name='Inside')
        scored = [base, _match(0.58, 0.05, name='TooClose'), _match(0.40, 0.1, name='TooDark'), inside]

        self.assertEqual(select_perimeter_options(scored, base), [inside])

    def test_same_undertone_first(self):
        """Shades sharing the base undertone beat better-scoring others."""
        from makemeup.shade_matching.ranking.perimeter import select_perimeter_options
        from makemeup.shade_matching.undertone import Undertone

        base = _match(0.7, 0.0, Undertone.WARM, name='Base')
        warm = _match(0.62, 0.30, Undertone.WARM, name='Warm')
        cool = _match(0.63, 0.10, Undertone.COOL, name='Cool')
        neutral = _match(0.64, 0.20, Undertone.NEUTRAL, name='Neutral')

        options = select_perimeter_options([base, cool, neutral, warm], base)
        self.assertEqual([m.entry.shade_name for m in options], ['Warm', 'Cool', 'Neutral'])

    def test_limited_to_count(self):
        """At most `count` options are returned."""
        from makemeup.shade_matching.ranking.perimeter import select_perimeter_options

        base = _match(0.7, 0.0)
        scored = [base] + [_match(0.62, 0.01 * i, name=f'S{i}') for i in range(6)]

        self.assertEqual(len(select_perimeter_options(scored, base)), 3)
        self.assertEqual(len(select_perimeter_options(scored, base, count=5)), 5)
        self.assertEqual(select_perimeter_options(scored, base, count=0), [])

    def test_no_base(self):
        """Without a base match there are no perimeter options."""
        from makemeup.shade_matching.ranking.perimeter import select_perimeter_options

        self.assertEqual(select_perimeter_options([_match(0.5, 0.1)], None), [])

    def test_none_in_window(self):
        """No candidates in the window gives an empty list."""
        from makemeup.shade_matching.ranking.perimeter import select_perimeter_options

        base = _match(0.7, 0.0)
        self.assertEqual(select_perimeter_options([base, _match(0.9, 0.1)], base), [])


if __name__ == '__main__':
    unittest.main()
