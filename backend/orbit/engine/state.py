"""OrbitState — caller-owned container for one user's orbit.

Holds the ranked friend list, the viewport, and the last ring layout (whose
thresholds seed the next smoothing step). The engine functions stay pure;
this object is just the convenient place to keep their inputs and outputs
between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from orbit.engine.config import DEFAULT_LAYOUT_CONFIG, DEFAULT_RANKING_CONFIG, LayoutConfig, RankingConfig
from orbit.engine.layout import FriendPosition, RingLayout, compute_friend_positions, compute_rings
from orbit.engine.ranking import (
    CompareFn,
    InsertResult,
    RankingError,
    _UNSET,
    group_scores,
    insert_with_comparisons,
    tie_key,
)
from orbit.models.friend import Friend

logger = logging.getLogger(__name__)

# Fields a caller may edit directly; closeness only changes through ranking
_EDITABLE_FIELDS = frozenset({"name", "user_id", "city", "state", "country", "coordinates"})


@dataclass
class OrbitState:
    friends: list[Friend] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0
    ring_layout: RingLayout | None = None
    positions: list[FriendPosition] = field(default_factory=list)
    ranking_config: RankingConfig = DEFAULT_RANKING_CONFIG
    layout_config: LayoutConfig = DEFAULT_LAYOUT_CONFIG

    def sorted_friends(self) -> list[Friend]:
        """Friends by descending closeness; equal scores keep their stored order."""
        return sorted(self.friends, key=lambda f: -f.closeness)

    def get_friend(self, friend_id: str) -> Friend | None:
        return next((f for f in self.friends if f.id == friend_id), None)

    async def insert(
        self,
        candidate: Friend,
        compare: CompareFn,
        max_comparisons: int | None = None,
        smoothing_factor: float | None = _UNSET,
    ) -> InsertResult:
        """Rank ``candidate`` against the current friends and adopt the result.

        ``smoothing_factor`` defaults to ``ranking_config``; ``None`` disables it.
        """
        result = await insert_with_comparisons(
            self.sorted_friends(),
            candidate,
            compare,
            max_comparisons=max_comparisons,
            smoothing_factor=smoothing_factor,
            config=self.ranking_config,
        )
        self.apply(result)
        return result

    def apply(self, result: InsertResult) -> None:
        """Replace the friend list with a completed insertion's output."""
        self.friends = list(result.friends)

    def update_friend(self, friend_id: str, **updates: Any) -> Friend:
        unknown = set(updates) - _EDITABLE_FIELDS
        if unknown:
            raise RankingError(f"cannot update {sorted(unknown)} directly")
        for i, friend in enumerate(self.friends):
            if friend.id == friend_id:
                updated = Friend.model_validate({**friend.model_dump(), **updates})
                self.friends[i] = updated
                return updated
        raise KeyError(friend_id)

    def remove_friend(self, friend_id: str) -> Friend:
        """Drop a friend and re-spread the rest over 10..0, keeping ties."""
        friend = self.get_friend(friend_id)
        if friend is None:
            raise KeyError(friend_id)
        remaining = [f for f in self.sorted_friends() if f.id != friend_id]
        digits = self.ranking_config.tie_round_digits
        scores = group_scores(
            [tie_key(f.closeness, digits) for f in remaining], self.ranking_config.max_score
        )
        self.friends = [f.with_closeness(float(s)) for f, s in zip(remaining, scores)]
        logger.info("Removed %r; %d friends remain", friend_id, len(self.friends))
        return friend

    def reset(self) -> None:
        self.friends = []
        self.ring_layout = None
        self.positions = []

    def relayout(
        self,
        width: float | None = None,
        height: float | None = None,
        rng: np.random.Generator | None = None,
    ) -> list[FriendPosition]:
        """Recompute rings and positions, smoothing against the previous rings."""
        if width is not None:
            self.width = width
        if height is not None:
            self.height = height
        previous = self.ring_layout.thresholds if self.ring_layout else None
        self.ring_layout = compute_rings(
            [f.closeness for f in self.friends],
            self.width,
            self.height,
            previous_thresholds=previous,
            config=self.layout_config,
        )
        self.positions = compute_friend_positions(
            self.friends,
            self.ring_layout,
            self.width,
            self.height,
            rng=rng,
            config=self.layout_config,
        )
        return self.positions

    def friends_by_ring(self, ring: int) -> list[FriendPosition]:
        return [p for p in self.positions if p.ring == ring]
