"""Ranked insertion — place a new friend using as few pairwise comparisons as possible.

The list is kept sorted by descending closeness (index 0 = closest). A
candidate is located by binary search against a comparison oracle, spliced
in, and every member is re-scored from its rank:

    score = 10 * (G - 1 - g) / (G - 1)

where g is the member's tie-group index and G the number of groups. Without
ties every member is its own group and this is the plain rank-linear scale
(closest = 10, farthest = 0). A lone friend scores 10.

The oracle is usually a person, so ``insert_with_comparisons`` awaits each
answer before asking the next question. ``RankingSession`` exposes the same
search one step at a time for callers that receive answers out of band
(e.g. one HTTP request per answer).
"""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from orbit.engine.config import DEFAULT_RANKING_CONFIG, RankingConfig
from orbit.models.friend import Friend, RatingComparison
from orbit.utils.math_helpers import interior_moving_average, linear_ramp

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class RankingError(ValueError):
    """A ranking precondition was violated. Inputs are left untouched."""


class CompareResult(str, enum.Enum):
    """Oracle verdict for ``compare(candidate, pivot)``."""

    LESS_CLOSE = "less_close"
    MORE_CLOSE = "more_close"
    TIE = "tie"

    @classmethod
    def coerce(cls, value: Any) -> CompareResult:
        """Accept a member, its string value, or the numeric -1 / 0 / +1 convention."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        elif isinstance(value, int) and not isinstance(value, bool) and value in _NUMERIC:
            return _NUMERIC[value]
        raise RankingError(f"unrecognised comparison result: {value!r}")


_NUMERIC = {
    -1: CompareResult.LESS_CLOSE,
    0: CompareResult.TIE,
    1: CompareResult.MORE_CLOSE,
}

CompareFn = Callable[[Friend, Friend], Awaitable[Any]]


class SessionStatus(str, enum.Enum):
    COMPARING = "comparing"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"


@dataclass
class InsertResult:
    """Outcome of one insertion: the re-scored list plus how it was reached."""

    friends: list[Friend]
    comparisons_used: int
    insert_index: int
    pivots_visited: list[str] = field(default_factory=list)
    comparisons: list[RatingComparison] = field(default_factory=list)
    tied_with: str | None = None

    @property
    def candidate(self) -> Friend:
        return self.friends[self.insert_index]


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def default_max_comparisons(n: int, cap: int = DEFAULT_RANKING_CONFIG.comparison_cap) -> int:
    """Comparison budget for a list of ``n``: ceil(log2 n) + 1, capped."""
    if n <= 0:
        return 0
    return min(math.ceil(math.log2(n)) + 1, cap)


def rank_scores(n: int, top: float = 10.0) -> NDArray[np.float64]:
    """Positional scores: index 0 gets ``top``, index n-1 gets 0."""
    return linear_ramp(n, top)


def tie_key(score: float, digits: int = DEFAULT_RANKING_CONFIG.tie_round_digits) -> float:
    return round(score, digits)


def _group_indices(keys: Sequence[object]) -> NDArray[np.int64]:
    groups = np.zeros(len(keys), dtype=np.int64)
    for i in range(1, len(keys)):
        groups[i] = groups[i - 1] + (0 if keys[i] == keys[i - 1] else 1)
    return groups


def group_scores(keys: Sequence[object], top: float = 10.0) -> NDArray[np.float64]:
    """Rank-linear scores over runs of equal adjacent keys.

    Every member of a run gets the same score, so ties survive re-scoring.
    """
    if len(keys) == 0:
        return np.empty(0)
    groups = _group_indices(keys)
    return linear_ramp(int(groups[-1]) + 1, top)[groups]


def smooth_scores(scores: Sequence[float], alpha: float) -> NDArray[np.float64]:
    """Optional cosmetic pass: pull interior scores toward their neighbours' mean."""
    _check_smoothing(alpha)
    return interior_moving_average(scores, alpha, 0.0, 10.0)


def _check_smoothing(alpha: float | None) -> None:
    if alpha is None:
        return
    if not 0.0 <= alpha <= 1.0:
        raise RankingError(f"smoothing factor must be within [0, 1], got {alpha}")


def _outside_tie_group(keys: Sequence[object], index: int) -> int:
    """Move an insertion point that would split a tie group to just below it."""
    while 0 < index < len(keys) and keys[index - 1] == keys[index]:
        index += 1
    return index


def _check_preconditions(friends: Sequence[Friend], candidate: Friend) -> None:
    ids = [f.id for f in friends]
    if len(set(ids)) != len(ids):
        raise RankingError("ranked friends contain duplicate ids")
    if candidate.id in ids:
        raise RankingError(f"candidate {candidate.id!r} is already ranked")
    for above, below in zip(friends, friends[1:]):
        if above.closeness < below.closeness:
            raise RankingError(
                f"friends must be sorted by descending closeness "
                f"({above.id!r}={above.closeness} precedes {below.id!r}={below.closeness})"
            )


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


@dataclass
class RankingSession:
    """Binary-search state for inserting one candidate.

    Comparing → (answers narrow [lo, hi]) → decided → resolve() → Resolved.
    A tie decides immediately. cancel() abandons the search; the caller's
    list is never modified either way.
    """

    sorted_friends: list[Friend]
    candidate: Friend
    max_comparisons: int
    config: RankingConfig = DEFAULT_RANKING_CONFIG
    lo: int = 0
    hi: int = -1
    comparisons_used: int = 0
    pivots_visited: list[str] = field(default_factory=list)
    history: list[RatingComparison] = field(default_factory=list)
    tied_index: int | None = None
    status: SessionStatus = SessionStatus.COMPARING

    @classmethod
    def start(
        cls,
        sorted_friends: Sequence[Friend],
        candidate: Friend,
        max_comparisons: int | None = None,
        config: RankingConfig | None = None,
    ) -> RankingSession:
        cfg = config or DEFAULT_RANKING_CONFIG
        friends = list(sorted_friends)
        _check_preconditions(friends, candidate)
        if max_comparisons is None:
            budget = default_max_comparisons(len(friends), cfg.comparison_cap)
        elif max_comparisons <= 0:
            raise RankingError(f"max_comparisons must be positive, got {max_comparisons}")
        else:
            budget = max_comparisons
        logger.debug(
            "Ranking %r against %d friends (budget %d)", candidate.id, len(friends), budget
        )
        return cls(
            sorted_friends=friends,
            candidate=candidate,
            max_comparisons=budget,
            config=cfg,
            hi=len(friends) - 1,
        )

    @property
    def is_decided(self) -> bool:
        return (
            self.tied_index is not None
            or self.lo > self.hi
            or self.comparisons_used >= self.max_comparisons
        )

    @property
    def pivot_index(self) -> int | None:
        if self.status is not SessionStatus.COMPARING or self.is_decided:
            return None
        return (self.lo + self.hi) // 2

    @property
    def pivot(self) -> Friend | None:
        """The friend the candidate should be compared with next, if any."""
        idx = self.pivot_index
        return None if idx is None else self.sorted_friends[idx]

    @property
    def insertion_index(self) -> int:
        if self.tied_index is not None:
            return self.tied_index + 1
        return self.lo

    def record(self, result: Any) -> None:
        """Apply the oracle's answer for the current pivot."""
        if self.status is not SessionStatus.COMPARING:
            raise RankingError(f"session is {self.status.value}")
        idx = self.pivot_index
        if idx is None:
            raise RankingError("no comparison pending; the insertion point is decided")
        outcome = CompareResult.coerce(result)
        pivot = self.sorted_friends[idx]

        self.comparisons_used += 1
        self.pivots_visited.append(pivot.id)
        self.history.append(
            RatingComparison(
                friend_a_id=self.candidate.id,
                friend_b_id=pivot.id,
                result=outcome.value,
            )
        )

        if outcome is CompareResult.TIE:
            self.tied_index = idx
        elif outcome is CompareResult.LESS_CLOSE:
            self.lo = idx + 1
        else:
            self.hi = idx - 1

        logger.debug(
            "  #%d %r vs %r: %s -> [%d, %d]",
            self.comparisons_used,
            self.candidate.id,
            pivot.id,
            outcome.value,
            self.lo,
            self.hi,
        )

    def cancel(self) -> None:
        if self.status is SessionStatus.RESOLVED:
            raise RankingError("session already resolved")
        self.status = SessionStatus.CANCELLED

    def resolve(self, smoothing_factor: float | None = _UNSET) -> InsertResult:
        """Splice the candidate in and re-score everyone.

        ``smoothing_factor`` defaults to the config value; ``None`` disables
        smoothing. Smoothing is skipped whenever tie groups are present since
        it would pull tied members apart.
        """
        if smoothing_factor is _UNSET:
            smoothing_factor = self.config.smoothing_factor
        _check_smoothing(smoothing_factor)
        if self.status is not SessionStatus.COMPARING:
            raise RankingError(f"session is {self.status.value}")
        if not self.is_decided:
            raise RankingError("comparisons still pending")

        digits = self.config.tie_round_digits
        keys: list[object] = [tie_key(f.closeness, digits) for f in self.sorted_friends]
        tied_with: str | None = None
        if self.tied_index is not None:
            index = self.insertion_index
            candidate_key: object = keys[self.tied_index]
            tied_with = self.sorted_friends[self.tied_index].id
        else:
            index = _outside_tie_group(keys, self.insertion_index)
            candidate_key = object()  # never equal to a neighbour
        keys.insert(index, candidate_key)
        members = [*self.sorted_friends[:index], self.candidate, *self.sorted_friends[index:]]

        scores = group_scores(keys, self.config.max_score)
        has_ties = len(members) > 1 and int(_group_indices(keys)[-1]) + 1 < len(members)
        if smoothing_factor is not None and not has_ties:
            scores = interior_moving_average(
                scores, smoothing_factor, self.config.min_score, self.config.max_score
            )

        friends = [f.with_closeness(float(s)) for f, s in zip(members, scores)]
        self.status = SessionStatus.RESOLVED
        logger.info(
            "Inserted %r at %d/%d after %d comparison(s)%s",
            self.candidate.id,
            index,
            len(friends),
            self.comparisons_used,
            f" (tied with {tied_with!r})" if tied_with else "",
        )
        return InsertResult(
            friends=friends,
            comparisons_used=self.comparisons_used,
            insert_index=index,
            pivots_visited=list(self.pivots_visited),
            comparisons=list(self.history),
            tied_with=tied_with,
        )


async def insert_with_comparisons(
    sorted_friends: Sequence[Friend],
    candidate: Friend,
    compare: CompareFn,
    max_comparisons: int | None = None,
    smoothing_factor: float | None = _UNSET,
    config: RankingConfig | None = None,
) -> InsertResult:
    """Insert ``candidate`` into ``sorted_friends`` by asking ``compare``.

    ``compare(candidate, pivot)`` is awaited once per question and never
    concurrently. When the budget runs out before the bounds cross, the
    current lower bound is used as the insertion point.
    """
    cfg = config or DEFAULT_RANKING_CONFIG
    if smoothing_factor is _UNSET:
        smoothing_factor = cfg.smoothing_factor
    _check_smoothing(smoothing_factor)

    session = RankingSession.start(sorted_friends, candidate, max_comparisons, cfg)
    # pivot is None once the insertion point is decided
    pivot = session.pivot
    while pivot is not None:
        session.record(await compare(candidate, pivot))
        pivot = session.pivot
    return session.resolve(smoothing_factor)
