from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from morris_core.board import IllegalStateError
from morris_core.config import RuleConfig, debug_enabled
from morris_core.engine import available_positions, new_game, step
from morris_core.events import Click, Confirm, Event, Notification, Surrender
from morris_core.serialize import (
    json_to_config,
    json_to_position,
    json_to_state,
    notifications_to_json,
    position_to_json,
    state_to_json,
)
from morris_core.state import GameState

LOG = logging.getLogger(__name__)

# The server keeps no games: every request carries the full state and gets the next one back.
app = Flask(__name__)


def _default_config() -> RuleConfig:
    return RuleConfig.from_env()


def _bad_request(msg: str) -> Any:
    LOG.debug("Rejecting request: %s", msg)
    return jsonify({"ok": False, "error": msg}), 400


def _load(body: Optional[Dict[str, Any]]) -> Tuple[GameState, RuleConfig]:
    """Parses the posted state and the config that travels with it."""
    if not isinstance(body, dict) or not isinstance(body.get("state"), dict):
        raise ValueError("state required")
    s_in = body["state"]
    cfg = json_to_config(s_in.get("config"), _default_config())
    return json_to_state(s_in), cfg


def _respond(state: GameState, cfg: RuleConfig, notes: List[Notification]) -> Any:
    return jsonify({
        "ok": True,
        "state": state_to_json(state, cfg),
        "notifications": notifications_to_json(notes),
        "available": [position_to_json(p) for p in available_positions(state, cfg)],
    })


def _apply(event_from_body) -> Any:
    body = request.get_json(force=True, silent=True)
    try:
        state, cfg = _load(body)
        event: Event = event_from_body(body)
    except Exception as e:
        return _bad_request(f"bad request: {e}")
    try:
        notes = step(state, event, cfg)
    except IllegalStateError as e:
        return _bad_request(f"inconsistent state: {e}")
    return _respond(state, cfg, notes)


def _click_event(body: Dict[str, Any]) -> Event:
    pos = json_to_position(body.get("position"))
    if pos is None:
        raise ValueError("position required")
    return Click(pos)


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        cfg = json_to_config(body, _default_config())
    except Exception as e:
        return _bad_request(f"bad config: {e}")
    state, notes = new_game(cfg)
    return _respond(state, cfg, notes)


@app.post("/api/click")
def api_click() -> Any:
    return _apply(_click_event)


@app.post("/api/confirm")
def api_confirm() -> Any:
    return _apply(lambda body: Confirm())


@app.post("/api/surrender")
def api_surrender() -> Any:
    return _apply(lambda body: Surrender())


@app.post("/api/legal")
def api_legal() -> Any:
    body = request.get_json(force=True, silent=True)
    try:
        state, cfg = _load(body)
    except Exception as e:
        return _bad_request(f"bad request: {e}")
    return jsonify({
        "ok": True,
        "phase": state.phase.name,
        "available": [position_to_json(p) for p in available_positions(state, cfg)],
    })


if __name__ == "__main__":
    debug = debug_enabled()
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)
    app.run(debug=debug)
