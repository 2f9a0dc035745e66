from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

MIN_TOKENS = 3
MAX_TOKENS = 11


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class RuleConfig:
    """Rule settings for one game.

    Flying lets a player reduced to three tokens move to any vacant point.
    Checkmate checks end the game when a player cannot move any token.
    """
    tokens_per_player: int = 9
    allow_flying: bool = False
    check_checkmate: bool = True

    def __post_init__(self) -> None:
        if not (MIN_TOKENS <= self.tokens_per_player <= MAX_TOKENS):
            raise ValueError(
                f"tokens_per_player must be between {MIN_TOKENS} and {MAX_TOKENS}, got {self.tokens_per_player}"
            )

    @classmethod
    def from_env(cls) -> 'RuleConfig':
        """Reads MORRIS_TOKENS, MORRIS_ALLOW_FLYING and MORRIS_CHECK_CHECKMATE."""
        tokens_raw: Optional[str] = os.getenv('MORRIS_TOKENS')
        tokens = int(tokens_raw) if tokens_raw and tokens_raw.strip() else cls.tokens_per_player
        return cls(
            tokens_per_player=tokens,
            allow_flying=_env_flag('MORRIS_ALLOW_FLYING', cls.allow_flying),
            check_checkmate=_env_flag('MORRIS_CHECK_CHECKMATE', cls.check_checkmate),
        )


def debug_enabled() -> bool:
    return _env_flag('MORRIS_DEBUG', False)
