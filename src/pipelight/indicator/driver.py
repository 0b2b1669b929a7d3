"""Indicator driver interface and the hardware-free simulated driver."""

from __future__ import annotations

import threading
import time
from collections.abc import Iterable
from contextlib import AbstractContextManager
from typing import Any, Protocol

from pipelight.logging import get_logger

logger = get_logger("indicator")


class IndicatorDriver(Protocol):
    """Interface for the device that owns the LED and buzzer outputs."""

    lock: AbstractContextManager[Any]
    closed: bool

    def set_output(self, pin: int, on: bool) -> None:
        """Drive one output high or low."""
        ...

    def buzz(self, pin: int, duration: float = ...) -> None:
        """Hold a buzzer output high for ``duration`` seconds."""
        ...

    def all_off(self, pins: Iterable[int]) -> None:
        """Drive every given output low."""
        ...

    def close(self) -> None:
        """Release the device connection."""
        ...

    def close_urgently(self) -> None:
        """Release the device from a signal handler (no locks, no logging)."""
        ...


class BaseDriver:
    """Shared behaviour for drivers that only know how to write a pin.

    Subclasses implement ``_write`` and ``_release``. The ``lock`` is shared
    by every panel using this driver so that compound mutations from
    different projects never interleave.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.closed = False
        self._known_pins: set[int] = set()

    def _write(self, pin: int, on: bool) -> None:
        raise NotImplementedError

    def _release(self) -> None:
        raise NotImplementedError

    def set_output(self, pin: int, on: bool) -> None:
        logger.debug("Turning %s pin %d", "on" if on else "off", pin)
        with self.lock:
            self._known_pins.add(pin)
            self._write(pin, on)

    def buzz(self, pin: int, duration: float = 0.5) -> None:
        logger.debug("Buzzing pin %d for %s sec", pin, duration)
        with self.lock:
            self.set_output(pin, True)
            time.sleep(duration)
            self.set_output(pin, False)

    def all_off(self, pins: Iterable[int]) -> None:
        with self.lock:
            for pin in pins:
                self.set_output(pin, False)

    def close(self) -> None:
        if self.closed:
            return
        logger.debug("Closing indicator driver")
        with self.lock:
            self._release()
            self.closed = True

    def close_urgently(self) -> None:
        # Runs inside a signal handler: the lock may be held by the
        # interrupted frame, so write pins directly.
        if self.closed:
            return
        for pin in list(self._known_pins):
            self._write(pin, False)
        time.sleep(0.1)
        self._release()
        self.closed = True


class SimulatedDriver(BaseDriver):
    """Driver without hardware; keeps pin states in memory and logs them."""

    def __init__(self) -> None:
        super().__init__()
        self.pins: dict[int, bool] = {}

    def _write(self, pin: int, on: bool) -> None:
        self.pins[pin] = on

    def _release(self) -> None:
        self.pins = {pin: False for pin in self.pins}

    def is_on(self, pin: int) -> bool:
        """Current state of a pin (False if never written)."""
        return self.pins.get(pin, False)
