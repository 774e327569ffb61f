"""Blind levels and the per-game blind schedule.

A schedule escalates lazily: nothing runs in the background.  Whenever a new
hand is about to start the caller reads the clock once and hands it to
``ensure_started`` and ``advance_if_expired``; only then is ``current_level``
snapshotted into the hand.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, NamedTuple, Optional

from pokerhand.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


class BlindLevel(NamedTuple):
    small_blind: int
    big_blind: int

    def __str__(self) -> str:
        return f"{self.small_blind}/{self.big_blind}"

    @classmethod
    def parse(cls, text: str) -> BlindLevel:
        """Parse '10/20' style notation."""
        sb, _, bb = text.partition("/")
        try:
            return cls(int(sb), int(bb))
        except ValueError:
            raise InvalidConfigurationError(f"Bad blind level: {text!r}") from None


# Escalation sequence used when a game does not pick a format
DEFAULT_BLIND_LEVELS: list[BlindLevel] = [
    BlindLevel(10, 20),
    BlindLevel(15, 30),
    BlindLevel(20, 40),
    BlindLevel(30, 60),
    BlindLevel(50, 100),
    BlindLevel(75, 150),
    BlindLevel(100, 200),
    BlindLevel(150, 300),
    BlindLevel(200, 400),
    BlindLevel(300, 600),
    BlindLevel(500, 1000),
]


class TournamentFormat(Enum):
    """Tournament structures offered at game setup: (minutes per level, levels).

    The minutes per level are house defaults, not an external standard.  The
    regular formats share ``DEFAULT_BLIND_LEVELS`` and differ only in pace;
    TURBO also skips every other level.
    """

    TWO_HR_SIX_PLAYERS = (15, tuple(DEFAULT_BLIND_LEVELS))
    TWO_HR_NINE_PLAYERS = (12, tuple(DEFAULT_BLIND_LEVELS))
    THREE_HR_NINE_PLAYERS = (20, tuple(DEFAULT_BLIND_LEVELS))
    TURBO = (8, tuple(DEFAULT_BLIND_LEVELS[::2]))

    @property
    def level_minutes(self) -> int:
        return self.value[0]

    @property
    def blind_levels(self) -> list[BlindLevel]:
        return list(self.value[1])


class BlindSchedule:
    """Ordered blind levels with a cursor and a lazily started expiry timer."""

    def __init__(
        self,
        levels: list[BlindLevel],
        level_duration: int,
        level_index: int = 0,
        expires_at: Optional[float] = None,
    ) -> None:
        if not levels:
            raise InvalidConfigurationError("Blind schedule needs at least one level")
        if level_duration <= 0:
            raise InvalidConfigurationError("Blind level duration must be positive")
        if not 0 <= level_index < len(levels):
            raise InvalidConfigurationError(f"Blind level index out of range: {level_index}")
        self.levels: list[BlindLevel] = [BlindLevel(*lvl) for lvl in levels]
        self.level_duration = level_duration  # minutes
        self.level_index = level_index
        self.expires_at = expires_at

    @classmethod
    def from_format(
        cls, fmt: TournamentFormat, starting_level: BlindLevel | None = None
    ) -> BlindSchedule:
        levels = fmt.blind_levels
        index = 0
        if starting_level is not None:
            if starting_level not in levels:
                raise InvalidConfigurationError(
                    f"Level {starting_level} is not part of {fmt.name}"
                )
            index = levels.index(starting_level)
        return cls(levels, fmt.level_minutes, level_index=index)

    @property
    def current_level(self) -> BlindLevel:
        return self.levels[self.level_index]

    @property
    def current_expiry(self) -> Optional[float]:
        return self.expires_at

    def _duration_seconds(self) -> float:
        return self.level_duration * 60.0

    def ensure_started(self, now: float) -> None:
        """Start the level timer if it has never been started."""
        if self.expires_at is None:
            self.expires_at = now + self._duration_seconds()

    def advance_if_expired(self, now: float) -> bool:
        """Move to the next level if the current one has run out.

        Returns True when the level timer was reset.
        """
        if self.expires_at is None or now < self.expires_at:
            return False
        previous = self.current_level
        self.level_index = min(self.level_index + 1, len(self.levels) - 1)
        self.expires_at = now + self._duration_seconds()
        logger.info("Blind level %s -> %s", previous, self.current_level)
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "levels": [[lvl.small_blind, lvl.big_blind] for lvl in self.levels],
            "level_duration": self.level_duration,
            "level_index": self.level_index,
            "expires_at": self.expires_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlindSchedule:
        return cls(
            levels=[BlindLevel(s[0], s[1]) for s in data["levels"]],
            level_duration=data["level_duration"],
            level_index=data.get("level_index", 0),
            expires_at=data.get("expires_at"),
        )
