"""Errors raised while evaluating an expression remotely."""
from enum import Enum


class ErrorKind(str, Enum):
    """Where a calculation failed."""

    TRANSPORT = "transport"  # network failure or non-2xx status
    SEMANTIC = "semantic"  # evaluator answered with an ``error`` field
    PROTOCOL = "protocol"  # response body does not match the schema


class CalculationError(Exception):
    """Base class for failures of a remote calculation."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(CalculationError):
    """Network failure, timeout or non-2xx status."""

    kind = ErrorKind.TRANSPORT


class SemanticError(CalculationError):
    """The evaluator answered with an error message."""

    kind = ErrorKind.SEMANTIC


class ProtocolError(CalculationError):
    """The response body is not JSON matching the expected schema."""

    kind = ErrorKind.PROTOCOL
