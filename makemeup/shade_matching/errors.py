# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Exceptions raised by the shade matching core.

Input problems are ValueErrors so callers can report them back to the
user. Upstream data-source problems are RuntimeErrors; the core never
retries them.
"""


class InvalidHexError(ValueError):
    """A color string is not 3 or 6 hex digits with an optional '#'."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid hex color: {value!r}")


class LightingParameterError(ValueError):
    """Lighting temperature or rendering index is out of range."""


class SamplingError(ValueError):
    """A photo region cannot yield a skin color sample."""


class CatalogUnavailableError(RuntimeError):
    """The catalog source could not be read."""
