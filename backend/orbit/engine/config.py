"""Engine configuration — the tunable constants of ranking and ring layout."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RankingConfig:
    """Controls binary-search insertion and rescoring."""

    # Interior moving-average weight (1.0 = no smoothing)
    smoothing_factor: float = 0.3
    # Hard cap on comparisons per insertion, whatever the list size
    comparison_cap: int = 9
    # Scores equal after rounding to this many places form one tie group
    tie_round_digits: int = 2
    # Closeness scale
    max_score: float = 10.0
    min_score: float = 0.0


@dataclass(frozen=True)
class LayoutConfig:
    """Controls ring count, spacing and threshold smoothing."""

    ring_count: int = 20
    interval: float = 0.5  # closeness width of one ring
    min_radius: float = 28.0  # innermost (closest) ring
    padding: float = 40.0  # gap between outermost ring and viewport edge
    # <1 makes the curve concave: gaps between rings shrink toward the edge
    radius_exponent: float = 0.7
    # Threshold blend against the previous frame
    smoothing_alpha: float = 0.28
    # Lone-friend layout
    single_ring_radius: float = 28.0
    single_ring_threshold: float = 10.0


DEFAULT_RANKING_CONFIG = RankingConfig()
DEFAULT_LAYOUT_CONFIG = LayoutConfig()
