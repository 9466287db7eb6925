"""Result computation engine: pure arithmetic for operation nodes."""
from typing import Any

from app.errors import BadRequest, InvalidOperation
from app.models.operation import OperationType


def parse_operation_type(value: Any) -> OperationType:
    """Map a wire value such as ``"ADD"`` to ``OperationType``."""
    try:
        return OperationType(value)
    except ValueError:
        allowed = ", ".join(kind.value for kind in OperationType)
        raise BadRequest(f"operation_type must be one of {allowed}") from None


def compute_result(previous_value: float, kind: OperationType, operand: float) -> float:
    """Apply ``kind`` with ``operand`` to ``previous_value``.

    Raises InvalidOperation for an unknown kind or division by zero. Overflow
    follows IEEE-754 and may yield ``inf``.
    """
    if kind == OperationType.add:
        return previous_value + operand
    elif kind == OperationType.subtract:
        return previous_value - operand
    elif kind == OperationType.multiply:
        return previous_value * operand
    elif kind == OperationType.divide:
        if operand == 0:
            raise InvalidOperation("division by zero")
        return previous_value / operand
    raise InvalidOperation(f"unrecognized operation kind: {kind!r}")
