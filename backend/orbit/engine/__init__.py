"""Orbit core — ranked insertion, derived scoring and ring layout.

``ranking`` and ``layout`` depend on ``orbit.models`` and are imported from
their modules directly; only the leaf modules are re-exported here.
"""

from orbit.engine.config import LayoutConfig, RankingConfig
from orbit.engine.icons import IconColor, IconConfig, IconKey, Shape, classify, icon_config

__all__ = [
    "LayoutConfig",
    "RankingConfig",
    "IconColor",
    "IconConfig",
    "IconKey",
    "Shape",
    "classify",
    "icon_config",
]
