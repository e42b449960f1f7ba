"""Error kinds raised by the ChairUp domain.

Each kind carries a ``kind`` code so clients can tell failures apart, and a
Protean-style ``messages`` mapping of field name to human-readable messages.
"""

from protean.exceptions import ObjectNotFoundError, ProteanExceptionWithMessage, ValidationError


class NotFound(ProteanExceptionWithMessage, ObjectNotFoundError):
    """A referenced product, order, cart, review or promotion does not exist."""

    kind = "not_found"


class InsufficientStock(ValidationError):
    """Requested quantity exceeds the product's available stock."""

    kind = "insufficient_stock"


class InvalidTransition(ValidationError):
    """The order cannot move from its current status to the requested one."""

    kind = "invalid_transition"


class Conflict(ValidationError):
    """The write would duplicate a record that must be unique."""

    kind = "conflict"


class Forbidden(ProteanExceptionWithMessage):
    """The actor lacks the rights for the requested mutation."""

    kind = "forbidden"


def describe(messages) -> str:
    """Flatten a messages mapping into a single sentence."""
    if isinstance(messages, dict):
        parts = []
        for value in messages.values():
            if isinstance(value, list | tuple):
                parts.extend(str(v) for v in value)
            else:
                parts.append(str(value))
        return "; ".join(parts)
    return str(messages)
