"""Errors raised while decoding client events."""


class ProtocolError(ValueError):
    """Raised when an inbound event payload cannot be interpreted."""
