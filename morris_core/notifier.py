from __future__ import annotations

from typing import Iterable, List, Optional

from .board import Owner
from .events import (
    Advisory,
    CounterChanged,
    DirectionPrompt,
    FocusChanged,
    GameOver,
    Notification,
    OwnershipChanged,
    TokenMoved,
)
from .topology import Position


class Notifier:
    """Outbound calls made by the engine. Every method defaults to a no-op.

    Implementations only render; they must not call back into the engine
    while handling a notification.
    """

    def on_ownership_changed(self, position: Position, owner: Owner) -> None:
        pass

    def on_token_moved(self, src: Position, dst: Position, owner: Owner) -> None:
        pass

    def on_counter_changed(self, player: Owner, remaining_to_place: int) -> None:
        pass

    def on_focus_changed(self, position: Optional[Position]) -> None:
        pass

    def on_direction_prompt(self, text: str) -> None:
        pass

    def on_advisory(self, text: str) -> None:
        pass

    def on_game_over(self, winner: Owner) -> None:
        pass


NullNotifier = Notifier


class RecordingNotifier(Notifier):
    """Keeps every notification it receives, in order."""

    def __init__(self) -> None:
        self.received: List[Notification] = []

    def on_ownership_changed(self, position: Position, owner: Owner) -> None:
        self.received.append(OwnershipChanged(position, owner))

    def on_token_moved(self, src: Position, dst: Position, owner: Owner) -> None:
        self.received.append(TokenMoved(src, dst, owner))

    def on_counter_changed(self, player: Owner, remaining_to_place: int) -> None:
        self.received.append(CounterChanged(player, remaining_to_place))

    def on_focus_changed(self, position: Optional[Position]) -> None:
        self.received.append(FocusChanged(position))

    def on_direction_prompt(self, text: str) -> None:
        self.received.append(DirectionPrompt(text))

    def on_advisory(self, text: str) -> None:
        self.received.append(Advisory(text))

    def on_game_over(self, winner: Owner) -> None:
        self.received.append(GameOver(winner))

    def clear(self) -> None:
        self.received.clear()


def dispatch(notifier: Notifier, notifications: Iterable[Notification]) -> None:
    """Delivers notification values to the matching notifier methods."""
    for n in notifications:
        if isinstance(n, OwnershipChanged):
            notifier.on_ownership_changed(n.position, n.owner)
        elif isinstance(n, TokenMoved):
            notifier.on_token_moved(n.src, n.dst, n.owner)
        elif isinstance(n, CounterChanged):
            notifier.on_counter_changed(n.player, n.remaining_to_place)
        elif isinstance(n, FocusChanged):
            notifier.on_focus_changed(n.position)
        elif isinstance(n, DirectionPrompt):
            notifier.on_direction_prompt(n.text)
        elif isinstance(n, Advisory):
            notifier.on_advisory(n.text)
        elif isinstance(n, GameOver):
            notifier.on_game_over(n.winner)
        else:
            raise TypeError(f"Unknown notification: {n!r}")
