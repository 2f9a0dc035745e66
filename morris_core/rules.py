from __future__ import annotations

from typing import List

from .board import BoardState, Owner
from .config import RuleConfig
from .topology import Mill, Position, mills_of, neighbours_of


def mill_formed(board: BoardState, mill: Mill, owner: Owner) -> bool:
    return all(board.owner_at(p) is owner for p in mill.positions())


def forms_mill(board: BoardState, p: Position, owner: Owner) -> bool:
    """True if p is part of a mill fully owned by owner."""
    return any(mill_formed(board, m, owner) for m in mills_of(p))


def formed_mills(board: BoardState, p: Position, owner: Owner) -> List[Mill]:
    return [m for m in mills_of(p) if mill_formed(board, m, owner)]


def has_free_token(board: BoardState, owner: Owner) -> bool:
    """True if owner has at least one token that is not part of a formed mill."""
    return any(not forms_mill(board, p, owner) for p in board.positions_of(owner))


def can_capture(board: BoardState, p: Position, defender: Owner) -> bool:
    """Mill members are protected unless every defender token sits in a mill.

    Evaluated against the current board on every call.
    """
    if board.owner_at(p) is not defender:
        return False
    return not forms_mill(board, p, defender) or not has_free_token(board, defender)


def capturable_positions(board: BoardState, defender: Owner) -> List[Position]:
    return [p for p in board.positions_of(defender) if can_capture(board, p, defender)]


def flying_eligible(board: BoardState, player: Owner, config: RuleConfig) -> bool:
    return config.allow_flying and board.tokens_on_board[player] == 3


def move_targets(board: BoardState, src: Position, config: RuleConfig) -> List[Position]:
    """Empty points the token at src may move to."""
    player = board.owner_at(src)
    if player is Owner.EMPTY:
        return []
    if flying_eligible(board, player, config):
        return board.empty_positions()
    return sorted(
        (q for q in neighbours_of(src) if board.owner_at(q) is Owner.EMPTY),
        key=lambda q: q.flat,
    )


def is_legal_move(board: BoardState, src: Position, dst: Position, config: RuleConfig) -> bool:
    return dst in move_targets(board, src, config)


def has_movable_token(board: BoardState, player: Owner, config: RuleConfig) -> bool:
    """True if any token of player has somewhere to go."""
    if flying_eligible(board, player, config):
        return bool(board.empty_positions())
    for p in board.positions_of(player):
        for q in neighbours_of(p):
            if board.owner_at(q) is Owner.EMPTY:
                return True
    return False


def is_out_of_tokens(board: BoardState, player: Owner) -> bool:
    """Two tokens can no longer form a mill."""
    return board.total_tokens(player) <= 2
