"""FirmataDriver - Drives LEDs and a buzzer on an Arduino running Firmata."""

from __future__ import annotations

from typing import Any

from pipelight.indicator.driver import BaseDriver
from pipelight.indicator.exceptions import BoardConnectionError, IndicatorError
from pipelight.logging import get_logger

logger = get_logger("indicator.firmata")


class FirmataDriver(BaseDriver):
    """Indicator driver backed by a pyfirmata2 board object.

    The board is injected so tests can pass a mock; use ``connect()`` to
    open a real serial connection.
    """

    def __init__(self, board: Any) -> None:
        super().__init__()
        self.board = board
        version = board.get_firmata_version()
        logger.info("Connected with Firmata version %s", version)

    @classmethod
    def connect(cls, port: str | None = None) -> FirmataDriver:
        """Open the Arduino on ``port``, autodetecting it when None.

        Raises:
            IndicatorError: If pyfirmata2 is not installed
            BoardConnectionError: If the board cannot be opened
        """
        try:
            from pyfirmata2 import Arduino  # noqa: PLC0415
        except ImportError as e:
            raise IndicatorError(
                "pyfirmata2 is required for hardware output (pip install 'pipelight[hardware]')"
            ) from e

        logger.debug("Connecting to arduino on %s ...", port or "autodetected port")
        try:
            board = Arduino(port or Arduino.AUTODETECT)
        except Exception as e:
            raise BoardConnectionError(f"Could not open Arduino on {port or 'any port'}: {e}") from e
        return cls(board)

    def _write(self, pin: int, on: bool) -> None:
        self.board.digital[pin].write(1 if on else 0)

    def _release(self) -> None:
        self.board.exit()
