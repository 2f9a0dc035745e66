from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .board import BoardState, Owner, PLAYERS
from .config import RuleConfig
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
from .state import GameState, Phase
from .topology import ALL_POSITIONS, Position, position_at

_OWNER_CODES = {Owner.EMPTY: '.', Owner.PLAYER_A: 'A', Owner.PLAYER_B: 'B'}
_CODE_OWNERS = {v: k for k, v in _OWNER_CODES.items()}


def position_to_json(p: Optional[Position]) -> Optional[List[int]]:
    if p is None:
        return None
    return [int(p.ring), int(p.index)]


def json_to_position(obj: Any) -> Optional[Position]:
    """Parses [ring, index]; None stays None. Raises ValueError on anything else."""
    if obj is None:
        return None
    if not isinstance(obj, (list, tuple)) or len(obj) != 2:
        raise ValueError(f"position must be [ring, index], got {obj!r}")
    return position_at(int(obj[0]), int(obj[1]))


def owner_from_name(name: str) -> Owner:
    try:
        return Owner[name]
    except KeyError:
        raise ValueError(f"unknown owner: {name!r}") from None


def _phase_from_name(name: Any) -> Phase:
    try:
        return Phase[str(name)]
    except KeyError:
        raise ValueError(f"unknown phase: {name!r}") from None


def board_key(board: BoardState) -> str:
    """24 characters, one per point in ring/index order: '.', 'A' or 'B'."""
    return ''.join(_OWNER_CODES[o] for o in board.cells())


def board_from_key(key: str, tokens_to_place: Dict[Owner, int]) -> BoardState:
    if len(key) != len(ALL_POSITIONS):
        raise ValueError(f"board key must have {len(ALL_POSITIONS)} characters")
    try:
        cells = [_CODE_OWNERS[ch] for ch in key]
    except KeyError as exc:
        raise ValueError(f"bad board character: {exc.args[0]!r}") from None
    return BoardState.from_cells(cells, tokens_to_place)


def config_to_json(cfg: RuleConfig) -> Dict[str, Any]:
    return {
        "tokensPerPlayer": int(cfg.tokens_per_player),
        "allowFlying": bool(cfg.allow_flying),
        "checkCheckmate": bool(cfg.check_checkmate),
    }


def _json_flag(o: Dict[str, Any], key: str, default: bool) -> bool:
    if key not in o:
        return default
    value = o[key]
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def json_to_config(obj: Optional[Dict[str, Any]], base: Optional[RuleConfig] = None) -> RuleConfig:
    """Overlays the keys present in obj onto base. Flags must be JSON booleans."""
    b = base or RuleConfig()
    o = obj or {}
    return RuleConfig(
        tokens_per_player=int(o.get("tokensPerPlayer", b.tokens_per_player)),
        allow_flying=_json_flag(o, "allowFlying", b.allow_flying),
        check_checkmate=_json_flag(o, "checkCheckmate", b.check_checkmate),
    )


def state_to_json(s: GameState, cfg: RuleConfig) -> Dict[str, Any]:
    board = s.board
    return {
        "board": board_key(board),
        "toPlace": {p.name: int(board.tokens_to_place[p]) for p in PLAYERS},
        "onBoard": {p.name: int(board.tokens_on_board[p]) for p in PLAYERS},
        "phase": s.phase.name,
        "resumePhase": s.resume_phase.name,
        "currentPlayer": s.current_player.name,
        "selected": position_to_json(s.selected),
        "pendingCapture": bool(s.pending_capture),
        "winner": s.winner.name if s.winner is not None else None,
        "config": config_to_json(cfg),
    }


def json_to_state(obj: Dict[str, Any]) -> GameState:
    """Rebuilds a GameState. On-board counts are recomputed from the board string.

    Raises ValueError for a state the engine could never have produced.
    """
    to_place_raw = obj.get("toPlace") or {}
    to_place = {p: int(to_place_raw.get(p.name, 0)) for p in PLAYERS}
    board = board_from_key(str(obj["board"]), to_place)
    phase = _phase_from_name(obj.get("phase", "PLACING"))
    default_resume = phase.name if phase in (Phase.PLACING, Phase.MOVING) else "PLACING"
    resume = _phase_from_name(obj.get("resumePhase", default_resume))
    current = owner_from_name(str(obj.get("currentPlayer", "PLAYER_A")))
    if current is Owner.EMPTY:
        raise ValueError("currentPlayer must be PLAYER_A or PLAYER_B")
    winner_raw = obj.get("winner")
    winner = owner_from_name(str(winner_raw)) if winner_raw else None
    pending = phase is Phase.CAPTURE_SELECTION
    if "pendingCapture" in obj and obj["pendingCapture"] is not pending:
        raise ValueError("pendingCapture must be true exactly in CAPTURE_SELECTION")
    state = GameState(
        board=board,
        phase=phase,
        current_player=current,
        selected=json_to_position(obj.get("selected")),
        pending_capture=pending,
        resume_phase=resume,
        winner=winner,
    )
    _check_consistent(state)
    return state


def _check_consistent(s: GameState) -> None:
    board = s.board
    if any(board.tokens_to_place[p] < 0 for p in PLAYERS):
        raise ValueError("toPlace must not be negative")
    if s.resume_phase not in (Phase.PLACING, Phase.MOVING):
        raise ValueError("resumePhase must be PLACING or MOVING")
    if (s.winner is not None) != (s.phase is Phase.GAME_OVER):
        raise ValueError("winner must be set exactly in GAME_OVER")
    if s.winner is Owner.EMPTY:
        raise ValueError("winner must be PLAYER_A or PLAYER_B")
    if s.phase is Phase.PLACING and board.tokens_to_place[s.current_player] <= 0:
        raise ValueError(f"{s.current_player.name} has no tokens left to place")
    if s.selected is None:
        return
    owner = board.owner_at(s.selected)
    if s.phase is Phase.MOVING and owner is not s.current_player:
        raise ValueError("selected must hold a token of the current player")
    if s.phase is Phase.CAPTURE_SELECTION and owner is not s.opponent:
        raise ValueError("selected must hold a token of the opponent")
    if s.phase in (Phase.PLACING, Phase.GAME_OVER):
        raise ValueError(f"nothing can be selected in {s.phase.name}")


def notification_to_json(n: Notification) -> Dict[str, Any]:
    if isinstance(n, OwnershipChanged):
        return {"type": "ownership", "position": position_to_json(n.position), "owner": n.owner.name}
    if isinstance(n, TokenMoved):
        return {"type": "moved", "from": position_to_json(n.src), "to": position_to_json(n.dst), "owner": n.owner.name}
    if isinstance(n, CounterChanged):
        return {"type": "counter", "player": n.player.name, "remaining": int(n.remaining_to_place)}
    if isinstance(n, FocusChanged):
        return {"type": "focus", "position": position_to_json(n.position)}
    if isinstance(n, DirectionPrompt):
        return {"type": "prompt", "text": n.text}
    if isinstance(n, Advisory):
        return {"type": "advisory", "text": n.text}
    if isinstance(n, GameOver):
        return {"type": "gameOver", "winner": n.winner.name}
    raise TypeError(f"Unknown notification: {n!r}")


def notifications_to_json(ns: Sequence[Notification]) -> List[Dict[str, Any]]:
    return [notification_to_json(n) for n in ns]
