"""Data models for indicator outputs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_BUZZER_PIN = 5


class Color(str, Enum):
    """Status LED colors."""

    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"


@dataclass(frozen=True)
class OutputSet:
    """Physical outputs assigned to one tracked project.

    Defaults match the single-project wiring. Projects may share a buzzer.
    """

    red: int = 9
    green: int = 10
    yellow: int = 11
    buzzer: int = DEFAULT_BUZZER_PIN

    def pin_for(self, color: Color) -> int:
        """Return the pin wired to a color."""
        return int(getattr(self, Color(color).value))

    @property
    def led_pins(self) -> tuple[int, ...]:
        """All LED pins, in red/green/yellow order."""
        return (self.red, self.green, self.yellow)
