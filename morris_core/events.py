"""Inbound events and outbound notifications exchanged with the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .board import Owner
from .topology import Position


# ---------- Inbound ----------

@dataclass(frozen=True)
class Click:
    """A point was clicked; meaning depends on the phase."""
    position: Position


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class Surrender:
    pass


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[Click, Confirm, Surrender, Reset]


# ---------- Outbound ----------

@dataclass(frozen=True)
class OwnershipChanged:
    position: Position
    owner: Owner


@dataclass(frozen=True)
class TokenMoved:
    src: Position
    dst: Position
    owner: Owner


@dataclass(frozen=True)
class CounterChanged:
    player: Owner
    remaining_to_place: int


@dataclass(frozen=True)
class FocusChanged:
    position: Optional[Position]


@dataclass(frozen=True)
class DirectionPrompt:
    text: str


@dataclass(frozen=True)
class Advisory:
    text: str


@dataclass(frozen=True)
class GameOver:
    winner: Owner


Notification = Union[
    OwnershipChanged,
    TokenMoved,
    CounterChanged,
    FocusChanged,
    DirectionPrompt,
    Advisory,
    GameOver,
]
