"""Custom exceptions for the indicator hardware layer."""


class IndicatorError(Exception):
    """Base exception for indicator driver errors."""


class BoardConnectionError(IndicatorError):
    """The Firmata board could not be opened."""
