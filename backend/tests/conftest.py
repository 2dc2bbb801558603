"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from orbit.api.sessions import get_session_store
from orbit.engine.ranking import CompareResult
from orbit.models.friend import Friend


def make_friend(fid: str, closeness: float = 0.0, **kwargs) -> Friend:
    return Friend(id=fid, name=kwargs.pop("name", fid.title()), closeness=closeness, **kwargs)


def make_ranked(n: int) -> list[Friend]:
    """n friends already spread over 10..0 by rank."""
    if n == 1:
        return [make_friend("f0", 10.0)]
    return [make_friend(f"f{i}", 10.0 * (n - 1 - i) / (n - 1)) for i in range(n)]


def scripted(answers: dict[str, CompareResult], default: CompareResult = CompareResult.LESS_CLOSE):
    """Async oracle answering per pivot id; records the pivots it was asked about."""
    asked: list[str] = []

    async def compare(candidate: Friend, pivot: Friend) -> CompareResult:
        asked.append(pivot.id)
        return answers.get(pivot.id, default)

    compare.asked = asked  # type: ignore[attr-defined]
    return compare


def by_true_rank(true_closeness: dict[str, float]):
    """Async oracle that knows everyone's real closeness."""

    async def compare(candidate: Friend, pivot: Friend) -> CompareResult:
        a = true_closeness[candidate.id]
        b = true_closeness[pivot.id]
        if a == b:
            return CompareResult.TIE
        return CompareResult.MORE_CLOSE if a > b else CompareResult.LESS_CLOSE

    return compare


@pytest.fixture
def abc_friends() -> list[Friend]:
    return [
        make_friend("a", 10.0, name="Alice"),
        make_friend("b", 5.0, name="Bob"),
        make_friend("c", 0.0, name="Charlie"),
    ]


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture(autouse=True)
def _clear_sessions():
    get_session_store().clear()
    yield
    get_session_store().clear()
