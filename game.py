from __future__ import annotations

# Facade module that re-exports the Nine Men's Morris core.
# Kept so the Flask app and tests have one import point.
# Single-responsibility modules live under morris_core/*.

from morris_core.board import BoardState, IllegalStateError, Owner, PLAYERS
from morris_core.config import RuleConfig
from morris_core.engine import GameEngine, available_positions, new_game, step
from morris_core.events import (
    Advisory,
    Click,
    Confirm,
    CounterChanged,
    DirectionPrompt,
    FocusChanged,
    GameOver,
    OwnershipChanged,
    Reset,
    Surrender,
    TokenMoved,
)
from morris_core.notifier import Notifier, NullNotifier, RecordingNotifier, dispatch
from morris_core.rules import (
    can_capture,
    capturable_positions,
    flying_eligible,
    forms_mill,
    has_free_token,
    has_movable_token,
    is_out_of_tokens,
    move_targets,
)
from morris_core.serialize import (
    json_to_state,
    json_to_config,
    notifications_to_json,
    state_to_json,
)
from morris_core.state import GameState, Phase
from morris_core.topology import (
    ALL_MILLS,
    ALL_POSITIONS,
    Mill,
    Position,
    are_adjacent,
    mills_of,
    neighbours_of,
    position_at,
)


def main() -> None:
    # Console driver delegated to morris_core.cli
    from morris_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
