from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from .topology import ALL_POSITIONS, NUM_POSITIONS, Position


class Owner(Enum):
    EMPTY = "empty"
    PLAYER_A = "A"
    PLAYER_B = "B"

    @property
    def opponent(self) -> 'Owner':
        if self is Owner.PLAYER_A:
            return Owner.PLAYER_B
        if self is Owner.PLAYER_B:
            return Owner.PLAYER_A
        raise ValueError("EMPTY has no opponent")

    @property
    def label(self) -> str:
        if self is Owner.EMPTY:
            return "Nobody"
        return f"Player {self.value}"


PLAYERS = (Owner.PLAYER_A, Owner.PLAYER_B)


class IllegalStateError(RuntimeError):
    """Raised when the board is asked to do something the rules never allow."""


# Flat indices laid out on the classic three-square drawing.
_TEMPLATE = (
    "{0}---------{1}---------{2}\n"
    "|         |         |\n"
    "|   {8}-----{9}-----{10}   |\n"
    "|   |     |     |   |\n"
    "|   |   {16}-{17}-{18}   |   |\n"
    "{7}---{15}---{23}   {19}---{11}---{3}\n"
    "|   |   {22}-{21}-{20}   |   |\n"
    "|   |     |     |   |\n"
    "|   {14}-----{13}-----{12}   |\n"
    "|         |         |\n"
    "{6}---------{5}---------{4}"
)

_SYMBOLS = {Owner.EMPTY: ".", Owner.PLAYER_A: "A", Owner.PLAYER_B: "B"}


class BoardState:
    """Ownership of the 24 points plus per-player token counters."""

    def __init__(self, tokens_per_player: int = 9) -> None:
        self._cells: List[Owner] = [Owner.EMPTY] * NUM_POSITIONS
        self.tokens_to_place: Dict[Owner, int] = {p: tokens_per_player for p in PLAYERS}
        self.tokens_on_board: Dict[Owner, int] = {p: 0 for p in PLAYERS}

    def owner_at(self, p: Position) -> Owner:
        return self._cells[p.flat]

    def place(self, p: Position, player: Owner) -> None:
        if player not in PLAYERS:
            raise IllegalStateError(f"cannot place for {player}")
        if self._cells[p.flat] is not Owner.EMPTY:
            raise IllegalStateError(f"place on occupied point {p}")
        if self.tokens_to_place[player] <= 0:
            raise IllegalStateError(f"{player.label} has no tokens left to place")
        self._cells[p.flat] = player
        self.tokens_on_board[player] += 1
        self.tokens_to_place[player] -= 1

    def move(self, src: Position, dst: Position, player: Owner) -> None:
        if self._cells[src.flat] is not player:
            raise IllegalStateError(f"{player.label} does not own {src}")
        if self._cells[dst.flat] is not Owner.EMPTY:
            raise IllegalStateError(f"move onto occupied point {dst}")
        self._cells[src.flat] = Owner.EMPTY
        self._cells[dst.flat] = player

    def remove(self, p: Position) -> Owner:
        """Clears p and returns the previous owner."""
        owner = self._cells[p.flat]
        if owner is Owner.EMPTY:
            raise IllegalStateError(f"remove from empty point {p}")
        self._cells[p.flat] = Owner.EMPTY
        self.tokens_on_board[owner] -= 1
        return owner

    def positions_of(self, player: Owner) -> List[Position]:
        return [p for p in ALL_POSITIONS if self._cells[p.flat] is player]

    def empty_positions(self) -> List[Position]:
        return self.positions_of(Owner.EMPTY)

    def total_tokens(self, player: Owner) -> int:
        """Tokens still in play for a player: on the board plus not yet placed."""
        return self.tokens_on_board[player] + self.tokens_to_place[player]

    def fully_placed(self) -> bool:
        return all(self.tokens_to_place[p] <= 0 for p in PLAYERS)

    def copy(self) -> 'BoardState':
        other = BoardState.__new__(BoardState)
        other._cells = list(self._cells)
        other.tokens_to_place = dict(self.tokens_to_place)
        other.tokens_on_board = dict(self.tokens_on_board)
        return other

    def cells(self) -> List[Owner]:
        """Owners in ring/index order."""
        return list(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return (
            self._cells == other._cells
            and self.tokens_to_place == other.tokens_to_place
            and self.tokens_on_board == other.tokens_on_board
        )

    def pretty(self, selected: Optional[Position] = None) -> str:
        """Draws the board as text. A selected token is shown in lower case."""
        symbols: List[str] = []
        for p in ALL_POSITIONS:
            sym = _SYMBOLS[self._cells[p.flat]]
            if selected == p:
                sym = sym.lower() if sym != "." else "*"
            symbols.append(sym)
        return _TEMPLATE.format(*symbols)

    @classmethod
    def from_cells(cls, cells: List[Owner], tokens_to_place: Dict[Owner, int]) -> 'BoardState':
        """Rebuilds a board from owners in ring/index order; on-board counts are derived."""
        if len(cells) != NUM_POSITIONS:
            raise ValueError(f"expected {NUM_POSITIONS} cells, got {len(cells)}")
        board = cls.__new__(cls)
        board._cells = list(cells)
        board.tokens_to_place = {p: int(tokens_to_place[p]) for p in PLAYERS}
        board.tokens_on_board = {p: sum(1 for c in cells if c is p) for p in PLAYERS}
        return board
