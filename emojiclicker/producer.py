from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProducerDef:
    """Static definition of a producer: a building that generates currency per second."""

    id: str
    base_cost: float
    base_rate: float
    display_name: str = ""
    icon: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)


@dataclass(frozen=True)
class ProducerStatus:
    """Read-only snapshot of a producer for the store panel."""

    id: str
    display_name: str
    count: int
    next_cost: float
    bulk_quantity: int
    bulk_cost: float
    affordable: bool
