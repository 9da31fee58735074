from __future__ import annotations

import operator
from typing import Callable, Protocol

_OPS: dict[str, Callable[[float, float], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
    "==": operator.eq,
    "!=": operator.ne,
}


class RandomSource(Protocol):
    """The slice of ``random.Random`` the engine draws from.

    Tests substitute a scripted sequence to pin down crits, weighted
    event choices and void outcomes.
    """

    def random(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...


def compare(left: float, op: str, right: float) -> bool:
    """Compare two values using a string operator."""
    fn = _OPS.get(op)
    if fn is None:
        raise ValueError(f"Unknown operator: {op!r}. Expected one of {list(_OPS)}")
    return fn(left, right)
