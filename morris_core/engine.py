"""The rule engine: a reducer over GameState plus a small stateful wrapper.

``step(state, event, config)`` mutates ``state`` in place and returns the
notifications the presentation layer should receive. Rule violations are not
errors; they come back as :class:`Advisory` notifications and leave the board
untouched. Callers must feed events one at a time.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .board import BoardState, Owner, PLAYERS
from .config import RuleConfig
from .events import (
    Advisory,
    Click,
    Confirm,
    CounterChanged,
    DirectionPrompt,
    Event,
    FocusChanged,
    GameOver,
    Notification,
    OwnershipChanged,
    Reset,
    Surrender,
    TokenMoved,
)
from .notifier import Notifier, dispatch
from .rules import (
    can_capture,
    capturable_positions,
    flying_eligible,
    forms_mill,
    has_movable_token,
    is_out_of_tokens,
    move_targets,
)
from .state import GameState, Phase
from .topology import ALL_POSITIONS, Position, are_adjacent

LOG = logging.getLogger(__name__)

MSG_OWN_POINT = "You have already taken this point"
MSG_OPPONENT_POINT = "This point is taken by your opponent"
MSG_CHOOSE_OWN = "It's moving phase, choose one of your tokens"
MSG_NOT_FREE = "You must choose a free place"
MSG_NOT_NEIGHBOUR = "You must choose a place neighbouring the selected token"
MSG_PROTECTED = "You must remove a token that doesn't form a mill"
MSG_SELECT_ENEMY = "Please select an enemy token for removal"
MSG_CONFIRM_REMOVAL = "Press confirm button to remove selected token"


def _take_prompt(player: Owner) -> str:
    return f"{player.label} take enemy token if you wish"


def _turn_prompt(player: Owner, phase: Phase) -> str:
    if phase is Phase.PLACING:
        return f"{player.label} place a new token"
    return f"{player.label} move one of your tokens"


def new_game(config: Optional[RuleConfig] = None) -> Tuple[GameState, List[Notification]]:
    """Creates a fresh game and the notifications that draw it."""
    cfg = config or RuleConfig()
    state = GameState.new(cfg.tokens_per_player)
    out: List[Notification] = []
    _reset(state, cfg, out)
    return state, out


def step(state: GameState, event: Event, config: RuleConfig) -> List[Notification]:
    """Applies one input event to state and returns the resulting notifications."""
    out: List[Notification] = []
    if isinstance(event, Reset):
        _reset(state, config, out)
    elif state.phase is Phase.GAME_OVER:
        LOG.debug("Ignoring %s: game is over", type(event).__name__)
    elif isinstance(event, Surrender):
        LOG.info("%s surrenders", state.current_player.label)
        _end_game(state, state.opponent, out)
    elif isinstance(event, Confirm):
        _on_confirm(state, config, out)
    elif isinstance(event, Click):
        if state.phase is Phase.CAPTURE_SELECTION:
            _on_capture_click(state, event.position, out)
        elif state.phase is Phase.PLACING:
            _on_place(state, event.position, out)
        else:
            _on_move_click(state, event.position, config, out)
    else:
        raise TypeError(f"Unknown event: {event!r}")
    return out


def available_positions(state: GameState, config: RuleConfig) -> List[Position]:
    """Points a click can currently act on, for hinting in a front end."""
    board = state.board
    if state.phase is Phase.PLACING:
        return board.empty_positions()
    if state.phase is Phase.CAPTURE_SELECTION:
        return capturable_positions(board, state.opponent)
    if state.phase is Phase.MOVING:
        if state.selected is not None:
            return move_targets(board, state.selected, config)
        return [p for p in board.positions_of(state.current_player) if move_targets(board, p, config)]
    return []


# ---------- Transitions ----------

def _reset(state: GameState, config: RuleConfig, out: List[Notification]) -> None:
    state.board = BoardState(config.tokens_per_player)
    state.phase = Phase.PLACING
    state.resume_phase = Phase.PLACING
    state.current_player = Owner.PLAYER_A
    state.selected = None
    state.pending_capture = False
    state.winner = None
    for player in PLAYERS:
        out.append(CounterChanged(player, state.board.tokens_to_place[player]))
    for p in ALL_POSITIONS:
        out.append(OwnershipChanged(p, Owner.EMPTY))
    out.append(FocusChanged(None))
    out.append(DirectionPrompt(f"{Owner.PLAYER_A.label} place your token"))
    LOG.info("New game: %d tokens per player, flying=%s", config.tokens_per_player, config.allow_flying)


def _reject(state: GameState, text: str, out: List[Notification]) -> None:
    LOG.debug("Rejected click by %s in %s: %s", state.current_player.label, state.phase.value, text)
    out.append(Advisory(text))


def _on_place(state: GameState, p: Position, out: List[Notification]) -> None:
    board = state.board
    player = state.current_player
    owner = board.owner_at(p)
    if owner is not Owner.EMPTY:
        _reject(state, MSG_OWN_POINT if owner is player else MSG_OPPONENT_POINT, out)
        return
    board.place(p, player)
    out.append(OwnershipChanged(p, player))
    out.append(CounterChanged(player, board.tokens_to_place[player]))
    LOG.info("%s placed at %s", player.label, p)
    next_phase = Phase.MOVING if board.fully_placed() else Phase.PLACING
    _token_arrived(state, p, next_phase, out)


def _on_move_click(state: GameState, p: Position, config: RuleConfig, out: List[Notification]) -> None:
    board = state.board
    player = state.current_player
    owner = board.owner_at(p)
    if owner is player:
        # A player may change their mind about which token to move.
        state.selected = p
        out.append(FocusChanged(p))
        return
    src = state.selected
    if src is None:
        _reject(state, MSG_CHOOSE_OWN, out)
        return
    if owner is not Owner.EMPTY:
        _reject(state, MSG_NOT_FREE, out)
        return
    if not (are_adjacent(src, p) or flying_eligible(board, player, config)):
        _reject(state, MSG_NOT_NEIGHBOUR, out)
        return

    board.move(src, p, player)
    out.append(OwnershipChanged(src, Owner.EMPTY))
    out.append(TokenMoved(src, p, player))
    out.append(OwnershipChanged(p, player))
    out.append(FocusChanged(None))
    state.selected = None
    LOG.info("%s moved %s -> %s", player.label, src, p)

    if config.check_checkmate and not has_movable_token(board, state.opponent, config):
        LOG.info("%s cannot move", state.opponent.label)
        _end_game(state, player, out)
        return
    _token_arrived(state, p, Phase.MOVING, out)


def _token_arrived(state: GameState, p: Position, next_phase: Phase, out: List[Notification]) -> None:
    """Enters capture selection if p closed a mill, otherwise ends the turn."""
    state.resume_phase = next_phase
    if forms_mill(state.board, p, state.current_player):
        LOG.info("%s formed a mill at %s", state.current_player.label, p)
        state.phase = Phase.CAPTURE_SELECTION
        state.pending_capture = True
        state.selected = None
        out.append(DirectionPrompt(_take_prompt(state.current_player)))
    else:
        _end_turn(state, out)


def _on_capture_click(state: GameState, p: Position, out: List[Notification]) -> None:
    board = state.board
    defender = state.opponent
    owner = board.owner_at(p)
    if owner is defender:
        if p == state.selected:
            _clear_selection(state, out)
        elif can_capture(board, p, defender):
            state.selected = p
            out.append(FocusChanged(p))
            out.append(DirectionPrompt(MSG_CONFIRM_REMOVAL))
        else:
            _reject(state, MSG_PROTECTED, out)
    elif owner is Owner.EMPTY and state.selected is not None:
        _clear_selection(state, out)
    else:
        if state.selected is not None:
            _clear_selection(state, out)
        _reject(state, MSG_SELECT_ENEMY, out)


def _clear_selection(state: GameState, out: List[Notification]) -> None:
    state.selected = None
    out.append(FocusChanged(None))
    out.append(DirectionPrompt(_take_prompt(state.current_player)))


def _on_confirm(state: GameState, config: RuleConfig, out: List[Notification]) -> None:
    if state.phase is not Phase.CAPTURE_SELECTION:
        LOG.debug("Confirm ignored in %s", state.phase.value)
        return
    board = state.board
    player = state.current_player
    defender = state.opponent
    target = state.selected
    if target is not None:
        board.remove(target)
        out.append(OwnershipChanged(target, Owner.EMPTY))
        out.append(FocusChanged(None))
        LOG.info("%s captured %s", player.label, target)
    else:
        LOG.info("%s skipped the capture", player.label)

    if is_out_of_tokens(board, defender):
        _end_game(state, player, out)
        return
    if (
        config.check_checkmate
        and state.resume_phase is Phase.MOVING
        and not has_movable_token(board, defender, config)
    ):
        LOG.info("%s cannot move", defender.label)
        _end_game(state, player, out)
        return
    _end_turn(state, out)


def _end_turn(state: GameState, out: List[Notification]) -> None:
    state.current_player = state.opponent
    state.selected = None
    state.pending_capture = False
    state.phase = state.resume_phase
    out.append(DirectionPrompt(_turn_prompt(state.current_player, state.phase)))


def _end_game(state: GameState, winner: Owner, out: List[Notification]) -> None:
    if state.selected is not None:
        out.append(FocusChanged(None))
    state.phase = Phase.GAME_OVER
    state.winner = winner
    state.selected = None
    state.pending_capture = False
    out.append(DirectionPrompt(f"{winner.label} won!"))
    out.append(GameOver(winner))
    LOG.info("Game over, winner: %s", winner.label)


class GameEngine:
    """Owns one game and forwards every notification to a notifier."""

    def __init__(self, notifier: Optional[Notifier] = None, config: Optional[RuleConfig] = None) -> None:
        self.config = config or RuleConfig()
        self.notifier = notifier or Notifier()
        self.state, initial = new_game(self.config)
        dispatch(self.notifier, initial)

    def place_or_select(self, position: Position) -> List[Notification]:
        return self.handle(Click(position))

    def confirm_capture(self) -> List[Notification]:
        return self.handle(Confirm())

    def surrender(self) -> List[Notification]:
        return self.handle(Surrender())

    def reset(self) -> List[Notification]:
        return self.handle(Reset())

    def point_entered(self, position: Position) -> None:
        # Hover has no rule meaning.
        pass

    def point_exited(self, position: Position) -> None:
        pass

    def available_positions(self) -> List[Position]:
        return available_positions(self.state, self.config)

    def handle(self, event: Event) -> List[Notification]:
        """Steps the game and delivers the notifications to the notifier."""
        notifications = step(self.state, event, self.config)
        dispatch(self.notifier, notifications)
        return notifications
