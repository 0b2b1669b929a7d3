"""Unit tests for IndicatorPanel."""

import threading
from unittest.mock import MagicMock, call, patch

import pytest

from pipelight.indicator import Color, IndicatorPanel, OutputSet, SimulatedDriver

OUTPUTS = OutputSet(red=6, green=7, yellow=8, buzzer=5)


@pytest.fixture
def mock_driver() -> MagicMock:
    """Create a mock driver with a real lock."""
    driver = MagicMock()
    driver.lock = threading.RLock()
    return driver


@pytest.fixture
def panel(mock_driver: MagicMock) -> IndicatorPanel:
    """Create a panel on the non-default outputs."""
    return IndicatorPanel(mock_driver, OUTPUTS)


@pytest.mark.unit
class TestOutputSet:
    """Tests for OutputSet."""

    def test_defaults_match_single_project_wiring(self) -> None:
        """Default pins: red 9, green 10, yellow 11, buzzer 5."""
        outputs = OutputSet()

        assert outputs.led_pins == (9, 10, 11)
        assert outputs.buzzer == 5

    def test_pin_for(self) -> None:
        """Colors map onto their pins."""
        assert OUTPUTS.pin_for(Color.RED) == 6
        assert OUTPUTS.pin_for(Color.GREEN) == 7
        assert OUTPUTS.pin_for(Color.YELLOW) == 8


@pytest.mark.unit
class TestShow:
    """Tests for show and show_error."""

    def test_show_turns_off_then_on(self, panel: IndicatorPanel, mock_driver: MagicMock) -> None:
        """Own LEDs off, then the requested color on."""
        panel.show(Color.GREEN)

        assert mock_driver.mock_calls == [
            call.all_off((6, 7, 8)),
            call.set_output(7, True),
        ]

    def test_show_error_lights_yellow_and_red(
        self, panel: IndicatorPanel, mock_driver: MagicMock
    ) -> None:
        """Error pattern is yellow plus red."""
        panel.show_error()

        assert mock_driver.mock_calls == [
            call.all_off((6, 7, 8)),
            call.set_output(8, True),
            call.set_output(6, True),
        ]

    def test_lamp_test(self, panel: IndicatorPanel, mock_driver: MagicMock) -> None:
        """All LEDs on."""
        panel.lamp_test()

        assert mock_driver.set_output.call_args_list == [
            call(6, True),
            call(7, True),
            call(8, True),
        ]

    def test_off(self, panel: IndicatorPanel, mock_driver: MagicMock) -> None:
        """Only this project's LEDs are switched off."""
        panel.off()

        mock_driver.all_off.assert_called_once_with((6, 7, 8))

    def test_projects_do_not_touch_each_other(self) -> None:
        """Two panels on one driver keep their own LEDs."""
        driver = SimulatedDriver()
        first = IndicatorPanel(driver, OutputSet(red=9, green=10, yellow=11))
        second = IndicatorPanel(driver, OutputSet(red=6, green=7, yellow=8))

        first.show_error()
        second.show(Color.GREEN)

        assert driver.is_on(9) and driver.is_on(11) and not driver.is_on(10)
        assert driver.is_on(7) and not driver.is_on(6) and not driver.is_on(8)


@pytest.mark.unit
class TestBuzz:
    """Tests for buzz patterns."""

    def test_buzz_uses_assigned_buzzer(self, panel: IndicatorPanel, mock_driver: MagicMock) -> None:
        """Single pulse on the project's buzzer."""
        panel.buzz()

        mock_driver.buzz.assert_called_once_with(5, 0.5)

    @patch("pipelight.indicator.panel.time.sleep")
    def test_rapid_buzz_defaults(
        self, mock_sleep: MagicMock, panel: IndicatorPanel, mock_driver: MagicMock
    ) -> None:
        """Two short pulses separated by equal pauses."""
        panel.rapid_buzz()

        assert mock_driver.buzz.call_args_list == [call(5, 0.05), call(5, 0.05)]
        assert mock_sleep.call_args_list == [call(0.05), call(0.05)]

    @patch("pipelight.indicator.panel.time.sleep")
    def test_rapid_buzz_count(
        self, mock_sleep: MagicMock, panel: IndicatorPanel, mock_driver: MagicMock
    ) -> None:
        """count and duration are honoured."""
        panel.rapid_buzz(count=3, duration=0.3)

        assert mock_driver.buzz.call_args_list == [call(5, 0.3)] * 3
