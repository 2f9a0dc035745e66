from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import BoardState, Owner
from .topology import Position


class Phase(Enum):
    PLACING = "placing"
    MOVING = "moving"
    CAPTURE_SELECTION = "capture"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """Dynamic state of one game. Mutated only by the engine reducer."""
    board: BoardState
    phase: Phase = Phase.PLACING
    current_player: Owner = Owner.PLAYER_A
    selected: Optional[Position] = None
    pending_capture: bool = False
    # Phase to return to once a capture resolves.
    resume_phase: Phase = Phase.PLACING
    winner: Optional[Owner] = None

    @classmethod
    def new(cls, tokens_per_player: int = 9) -> 'GameState':
        return cls(board=BoardState(tokens_per_player))

    @property
    def opponent(self) -> Owner:
        return self.current_player.opponent

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def copy(self) -> 'GameState':
        return GameState(
            board=self.board.copy(),
            phase=self.phase,
            current_player=self.current_player,
            selected=self.selected,
            pending_capture=self.pending_capture,
            resume_phase=self.resume_phase,
            winner=self.winner,
        )
