from __future__ import annotations

import argparse
import logging
from typing import Callable, List, Optional

from .board import Owner
from .config import RuleConfig, debug_enabled
from .engine import GameEngine
from .notifier import Notifier
from .state import Phase
from .topology import Position, position_at

HELP = "Commands: 'r i' or 'r,i' click a point, c confirm removal, s surrender, n new game, q quit"


class ConsoleNotifier(Notifier):
    """Prints prompts and advisories; the board is redrawn by the loop."""

    def __init__(self, write: Callable[[str], None] = print) -> None:
        self._write = write

    def on_direction_prompt(self, text: str) -> None:
        self._write(f">> {text}")

    def on_advisory(self, text: str) -> None:
        self._write(f"!! {text}")

    def on_token_moved(self, src: Position, dst: Position, owner: Owner) -> None:
        self._write(f"{owner.label} moved {src} -> {dst}")

    def on_game_over(self, winner: Owner) -> None:
        self._write(f"Winner: {winner.label}. Type n for a new game or q to quit.")


def parse_position(text: str) -> Optional[Position]:
    """Parses 'r i' or 'r,i'. Returns None if the text is not a valid point."""
    sep = ',' if ',' in text else ' '
    parts = [t for t in text.split(sep) if t.strip() != '']
    if len(parts) != 2:
        return None
    try:
        return position_at(int(parts[0]), int(parts[1]))
    except ValueError:
        return None


def handle_command(engine: GameEngine, text: str) -> bool:
    """Feeds one typed command to the engine. Returns False when the user quits."""
    cmd = text.strip().lower()
    if cmd in ('q', 'quit', 'exit'):
        return False
    if cmd in ('c', 'confirm'):
        engine.confirm_capture()
    elif cmd in ('s', 'surrender'):
        engine.surrender()
    elif cmd in ('n', 'new'):
        engine.reset()
    elif cmd in ('h', 'help', '?'):
        print(HELP)
    else:
        pos = parse_position(cmd)
        if pos is None:
            print('Could not parse. ' + HELP)
        else:
            engine.place_or_select(pos)
    return True


def _status(engine: GameEngine) -> str:
    s = engine.state
    b = s.board
    counts = ', '.join(
        f"{p.label}: {b.tokens_on_board[p]} on board, {b.tokens_to_place[p]} to place"
        for p in (Owner.PLAYER_A, Owner.PLAYER_B)
    )
    return f"[{s.phase.value}] {counts}"


def main(argv: Optional[List[str]] = None) -> None:
    env_cfg = RuleConfig.from_env()
    parser = argparse.ArgumentParser(description="Nine men's morris, two players at one console")
    parser.add_argument('--tokens', type=int, default=env_cfg.tokens_per_player, help='Tokens per player')
    parser.add_argument('--flying', action='store_true', default=env_cfg.allow_flying,
                        help='Allow a player with three tokens to move anywhere')
    parser.add_argument('--no-checkmate', action='store_true', default=not env_cfg.check_checkmate,
                        help='Do not end the game when a player cannot move')
    parser.add_argument('--debug', action='store_true', default=debug_enabled(), help='Verbose logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    try:
        config = RuleConfig(
            tokens_per_player=args.tokens,
            allow_flying=args.flying,
            check_checkmate=not args.no_checkmate,
        )
    except ValueError as exc:
        parser.error(str(exc))
        return

    print(HELP)
    engine = GameEngine(ConsoleNotifier(), config)
    while True:
        s = engine.state
        print()
        print(s.board.pretty(s.selected))
        print(_status(engine))
        label = s.current_player.label if s.phase is not Phase.GAME_OVER else 'game over'
        try:
            text = input(f'{label}> ')
        except EOFError:
            break
        if not handle_command(engine, text):
            break


if __name__ == '__main__':
    main()
