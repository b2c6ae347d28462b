class RangeSnakeError(Exception):
    """Base class of every error raised by rangesnake"""


class SetupExhaustedError(RangeSnakeError):
    """A bounded sampling loop ran out of attempts"""


class DecodeError(RangeSnakeError, ValueError):
    """Serialized parameters or proof are malformed"""


class ProtocolStateError(RangeSnakeError):
    """Interactive protocol message sent out of order"""
