from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from emojiclicker._types import compare

if TYPE_CHECKING:
    from emojiclicker.state import GameState


class Requirement(ABC):
    """Base class for all requirements: boolean conditions on cumulative stats."""

    @abstractmethod
    def evaluate(self, state: GameState) -> bool: ...

    def is_visible(self, state: GameState, fraction: float = 0.5) -> bool:
        """Whether progress is far enough along to reveal what this gates."""
        return self.evaluate(state)

    @abstractmethod
    def describe(self) -> str: ...


# ── Private implementations ──────────────────────────────────────────


class _ThresholdRequirement(Requirement):
    """A requirement met once a measured stat reaches a threshold."""

    label = ""

    def __init__(self, threshold: float, op: str = ">=") -> None:
        self.threshold = threshold
        self.op = op

    @abstractmethod
    def measure(self, state: GameState) -> float: ...

    def evaluate(self, state: GameState) -> bool:
        return compare(self.measure(state), self.op, self.threshold)

    def is_visible(self, state: GameState, fraction: float = 0.5) -> bool:
        return self.measure(state) >= self.threshold * fraction

    def describe(self) -> str:
        return f"{self.label} {self.op} {self.threshold:g}"


class _ClicksRequirement(_ThresholdRequirement):
    label = "clicks"

    def measure(self, state: GameState) -> float:
        return state.total_clicks


class _TotalEarnedRequirement(_ThresholdRequirement):
    label = "total_earned"

    def measure(self, state: GameState) -> float:
        return state.total_earned


class _RateRequirement(_ThresholdRequirement):
    label = "rate"

    def measure(self, state: GameState) -> float:
        return state.rate


class _ProducerCountRequirement(_ThresholdRequirement):
    def __init__(self, producer_id: str, threshold: int, op: str = ">=") -> None:
        super().__init__(threshold, op)
        self.producer_id = producer_id
        self.label = producer_id

    def measure(self, state: GameState) -> float:
        return state.producer_count(self.producer_id)


class _GoldenClicksRequirement(_ThresholdRequirement):
    label = "golden_clicks"

    def measure(self, state: GameState) -> float:
        return state.golden_clicks


class _RebootsRequirement(_ThresholdRequirement):
    label = "reboots"

    def measure(self, state: GameState) -> float:
        return state.reboots


class _AchievementCountRequirement(_ThresholdRequirement):
    label = "achievements"

    def measure(self, state: GameState) -> float:
        return len(state.achievements)


class _SecretRequirement(Requirement):
    def __init__(self, flag: str) -> None:
        self.flag = flag

    def evaluate(self, state: GameState) -> bool:
        return self.flag in state.secrets

    def describe(self) -> str:
        return f"secret {self.flag}"


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for built-in requirement types."""

    @staticmethod
    def clicks(threshold: int) -> Requirement:
        return _ClicksRequirement(threshold)

    @staticmethod
    def total_earned(threshold: float) -> Requirement:
        return _TotalEarnedRequirement(threshold)

    @staticmethod
    def rate(threshold: float) -> Requirement:
        return _RateRequirement(threshold)

    @staticmethod
    def count(producer_id: str, threshold: int) -> Requirement:
        return _ProducerCountRequirement(producer_id, threshold)

    @staticmethod
    def golden_clicks(threshold: int) -> Requirement:
        return _GoldenClicksRequirement(threshold)

    @staticmethod
    def reboots(threshold: int) -> Requirement:
        return _RebootsRequirement(threshold)

    @staticmethod
    def achievements(threshold: int) -> Requirement:
        return _AchievementCountRequirement(threshold)

    @staticmethod
    def secret(flag: str) -> Requirement:
        return _SecretRequirement(flag)
