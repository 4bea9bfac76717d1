# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Configuration for the shade matching engine.

Defines parameters that control matching behavior including default
lighting, the perimeter shade window, the undertone penalty mode and
catalog scanning.
"""

import json
from dataclasses import dataclass, fields as dataclass_fields, asdict
from typing import Dict, Any, Optional

PENALTY_MODES = ('literal', 'corrected')


@dataclass
class MatchConfig:
    """Configuration for foundation shade matching.

    Attributes:
        default_cct_k: Lighting temperature used when a request has none.
            Default: 4000 K.
        default_cri: Color rendering index used when a request has none.
            Default: 80.
        default_n_results: Number of top matches returned. Default: 5.
        perimeter_min_delta_l: Minimum OKLAB lightness drop for a perimeter
            shade. Default: 0.03.
        perimeter_max_delta_l: Maximum OKLAB lightness drop for a perimeter
            shade. Default: 0.12.
        perimeter_count: Maximum number of perimeter shades. Default: 3.
        undertone_penalty_mode: 'literal' multiplies mismatched undertones
            by 0.9 (historical behavior), 'corrected' by 1.1.
            Default: 'literal'.
        catalog_limit: Maximum catalog rows read per query. None or 0
            reads the whole catalog. Default: 5000.
        parallel_threshold: Catalog size above which scoring is split across
            worker threads. 0 = never. Default: 2000.
        max_workers: Worker threads for parallel scoring. Default: 4.
        paired_limit: Number of two-tone shade pairs returned. Default: 20.
        catalog_path: Catalog file (.json, .csv) or SQLite database (.db)
            served by the API. Default: None.
    """
    default_cct_k: float = 4000.0
    default_cri: float = 80.0
    default_n_results: int = 5
    perimeter_min_delta_l: float = 0.03
    perimeter_max_delta_l: float = 0.12
    perimeter_count: int = 3
    undertone_penalty_mode: str = 'literal'
    catalog_limit: int = 5000
    parallel_threshold: int = 2000
    max_workers: int = 4
    paired_limit: int = 20
    catalog_path: Optional[str] = None

    def __post_init__(self):
        if self.undertone_penalty_mode not in PENALTY_MODES:
            raise ValueError(
                f"undertone_penalty_mode must be one of {PENALTY_MODES}, "
                f"got '{self.undertone_penalty_mode}'"
            )
        if self.perimeter_min_delta_l > self.perimeter_max_delta_l:
            raise ValueError("perimeter_min_delta_l exceeds perimeter_max_delta_l")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary.

        Returns:
            Dictionary representation of the config.
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatchConfig':
        """Create a MatchConfig from a dictionary.

        Unknown keys are ignored. Missing keys use defaults.

        Args:
            data: Dictionary with config values.

        Returns:
            New MatchConfig instance.
        """
        # Get valid field names
        valid_fields = {f.name for f in dataclass_fields(cls)}

        # Filter to only valid fields
        filtered_data = {k: v for k, v in data.items() if k in valid_fields}

        return cls(**filtered_data)

    @classmethod
    def from_file(cls, path: str) -> 'MatchConfig':
        """Load a MatchConfig from a JSON file.

        Args:
            path: Path to a JSON object with config values.

        Returns:
            New MatchConfig instance.
        """
        with open(path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        return cls.from_dict(data)
