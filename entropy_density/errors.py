"""Exceptions raised by entropy-density."""


class InvalidConfigurationError(ValueError):
    """A width, order, stride or sample count outside the supported range."""


class EndOfStream(Exception):
    """No complete symbol is left in the buffer.

    Raised by the bit reader as a control signal; estimators catch it and
    stop extraction, so it never reaches their callers.
    """
