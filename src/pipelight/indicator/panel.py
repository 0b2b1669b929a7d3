"""IndicatorPanel - One project's view of the shared indicator driver."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from pipelight.indicator.models import Color, OutputSet
from pipelight.logging import get_logger

if TYPE_CHECKING:
    from pipelight.indicator.driver import IndicatorDriver

logger = get_logger("indicator.panel")


class IndicatorPanel:
    """Binds a shared driver to the outputs assigned to one project.

    Every compound operation holds the driver lock, so two projects never
    interleave their off/on sequences or buzz patterns.
    """

    def __init__(self, driver: IndicatorDriver, outputs: OutputSet | None = None) -> None:
        self.driver = driver
        self.outputs = outputs or OutputSet()

    def off(self) -> None:
        """Turn off every LED of this project."""
        with self.driver.lock:
            self.driver.all_off(self.outputs.led_pins)

    def show(self, color: Color) -> None:
        """Light exactly one color."""
        logger.debug("Showing %s on pin %d", color.value, self.outputs.pin_for(color))
        with self.driver.lock:
            self.driver.all_off(self.outputs.led_pins)
            self.driver.set_output(self.outputs.pin_for(color), True)

    def show_error(self) -> None:
        """Light yellow and red together, the fetch-failure pattern."""
        with self.driver.lock:
            self.driver.all_off(self.outputs.led_pins)
            for color in (Color.YELLOW, Color.RED):
                self.driver.set_output(self.outputs.pin_for(color), True)

    def lamp_test(self) -> None:
        """Light every LED; done once at start-up."""
        with self.driver.lock:
            for pin in self.outputs.led_pins:
                self.driver.set_output(pin, True)

    def buzz(self, duration: float = 0.5) -> None:
        """Single buzzer pulse."""
        with self.driver.lock:
            self.driver.buzz(self.outputs.buzzer, duration)

    def rapid_buzz(self, count: int = 2, duration: float = 0.05) -> None:
        """``count`` pulses of ``duration`` seconds, each followed by an equal pause."""
        logger.debug("Buzzing %d times", count)
        with self.driver.lock:
            for _ in range(count):
                self.driver.buzz(self.outputs.buzzer, duration)
                time.sleep(duration)
