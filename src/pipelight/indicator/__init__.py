"""Indicator - LED and buzzer outputs shared by all tracked projects."""

from pipelight.indicator.driver import BaseDriver, IndicatorDriver, SimulatedDriver
from pipelight.indicator.exceptions import BoardConnectionError, IndicatorError
from pipelight.indicator.firmata import FirmataDriver
from pipelight.indicator.models import DEFAULT_BUZZER_PIN, Color, OutputSet
from pipelight.indicator.panel import IndicatorPanel

__all__ = [
    "DEFAULT_BUZZER_PIN",
    "BaseDriver",
    "BoardConnectionError",
    "Color",
    "FirmataDriver",
    "IndicatorDriver",
    "IndicatorError",
    "IndicatorPanel",
    "OutputSet",
    "SimulatedDriver",
]
