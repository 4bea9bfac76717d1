#!/usr/bin/python3
# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-

"""Tests for shade_matching.lighting - ambient lighting correction."""

import math
import unittest


SKIN = (0.84, 0.024, 0.099)


class TestAdjustForLighting(unittest.TestCase):
    """Tests for adjust_for_lighting."""

    def test_neutral_daylight_is_identity(self):
        """At 6500K the chroma is left untouched for any CRI."""
        from makemeup.shade_matching.lighting import adjust_for_lighting

        for cri in [0, 50, 80, 100]:
            adjusted = adjust_for_lighting(SKIN, 6500, cri)
            self.assertEqual(adjusted.a, SKIN[1])
            self.assertEqual(adjusted.b, SKIN[2])

    def test_lightness_never_changes(self):
        """L is returned unchanged for every lighting condition."""
        from makemeup.shade_matching.lighting import adjust_for_lighting

        for cct in [1900, 2700, 4000, 6500, 9000]:
            for cri in [0, 80, 100]:
                self.assertEqual(adjust_for_lighting(SKIN, cct, cri).L, SKIN[0])

    def test_office_lighting_shift(self):
        """4000K / CRI 80 shifts a by ~0.0023 and b by ~0.0035."""
        from makemeup.shade_matching.lighting import adjust_for_lighting

        adjusted = adjust_for_lighting((0.5, 0.0, 0.0), 4000, 80)
        self.assertAlmostEqual(adjusted.a, 0.02 * (2500 / 6500) * 0.3, places=9)
        self.assertAlmostEqual(adjusted.b, 0.03 * (2500 / 6500) * 0.3, places=9)
        self.assertAlmostEqual(adjusted.a, 0.0023077, places=6)
        self.assertAlmostEqual(adjusted.b, 0.0034615, places=6)

    def test_warm_light_shifts_positive(self):
        """Warm light pushes a and b up, cool light pushes them down."""
        from makemeup.shade_matching.lighting import adjust_for_lighting

        warm = adjust_for_lighting(SKIN, 2700, 90)
        cool = adjust_for_lighting(SKIN, 9000, 90)
        self.assertGreater(warm.a, SKIN[1])
        self.assertGreater(warm.b, SKIN[2])
        self.assertLess(cool.a, SKIN[1])
        self.assertLess(cool.b, SKIN[2])

    def test_high_cri_shifts_less(self):
        """A high-CRI source needs a smaller correction than a poor one."""
        from makemeup.shade_matching.lighting import adjust_for_lighting

        good = adjust_for_lighting(SKIN, 4000, 100)
        poor = adjust_for_lighting(SKIN, 4000, 0)
        good_shift = math.hypot(good.a - SKIN[1], good.b - SKIN[2])
        poor_shift = math.hypot(poor.a - SKIN[1], poor.b - SKIN[2])
        self.assertGreater(good_shift, 0)
        self.assertLess(good_shift, poor_shift)

    def test_cri_is_clamped(self):
        """CRI outside 0-100 behaves like the nearest bound."""
        from makemeup.shade_matching.lighting import adjust_for_lighting

        self.assertEqual(adjust_for_lighting(SKIN, 3000, 150), adjust_for_lighting(SKIN, 3000, 100))
        self.assertEqual(adjust_for_lighting(SKIN, 3000, -20), adjust_for_lighting(SKIN, 3000, 0))

    def test_adjustment_vector_has_no_lightness(self):
        """The shift vector never moves L."""
        from makemeup.shade_matching.lighting import lighting_adjustment_vector
        self.assertEqual(lighting_adjustment_vector(2700, 50).L, 0.0)


class TestLightingContext(unittest.TestCase):
    """Tests for LightingContext validation and presets."""

    def test_defaults(self):
        """Default context is typical indoor light."""
        from makemeup.shade_matching.lighting import LightingContext
        ctx = LightingContext()
        self.assertEqual(ctx.cct_k, 4000.0)
        self.assertEqual(ctx.cri, 80.0)

    def test_invalid_cct_raises(self):
        """Non-positive or non-finite CCT is rejected."""
        from makemeup.shade_matching.errors import LightingParameterError
        from makemeup.shade_matching.lighting import LightingContext

        for cct in [0, -100, float('nan'), float('inf'), 'warm']:
            with self.assertRaises(LightingParameterError, msg=f"Expected failure for {cct!r}"):
                LightingContext(cct_k=cct)

    def test_invalid_cri_raises(self):
        """CRI outside 0-100 is rejected by the context."""
        from makemeup.shade_matching.errors import LightingParameterError
        from makemeup.shade_matching.lighting import LightingContext

        for cri in [-1, 100.5, float('nan')]:
            with self.assertRaises(LightingParameterError):
                LightingContext(cri=cri)

    def test_lighting_error_is_value_error(self):
        """LightingParameterError can be caught as ValueError."""
        from makemeup.shade_matching.lighting import LightingContext

        with self.assertRaises(ValueError):
            LightingContext(cct_k=-1)

    def test_adjust_matches_function(self):
        """LightingContext.adjust delegates to adjust_for_lighting."""
        from makemeup.shade_matching.lighting import LightingContext, adjust_for_lighting

        ctx = LightingContext(cct_k=3000, cri=90)
        self.assertEqual(ctx.adjust(SKIN), adjust_for_lighting(SKIN, 3000, 90))

    def test_presets(self):
        """Presets resolve by name."""
        from makemeup.shade_matching.lighting import LIGHTING_PRESETS, get_lighting_preset

        self.assertEqual(get_lighting_preset('daylight').cct_k, 6500)
        self.assertEqual(get_lighting_preset('incandescent').cct_k, 2700)
        self.assertIn('office_fluorescent', LIGHTING_PRESETS)

    def test_unknown_preset_raises(self):
        """Unknown preset names raise LightingParameterError."""
        from makemeup.shade_matching.errors import LightingParameterError
        from makemeup.shade_matching.lighting import get_lighting_preset

        with self.assertRaises(LightingParameterError):
            get_lighting_preset('disco')


if __name__ == '__main__':
    unittest.main()
