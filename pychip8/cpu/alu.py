"""Eight-bit arithmetic/logic unit."""

from __future__ import annotations

from .opcodes import AluOperation


def perform(
    lhs: int,
    rhs: int,
    operation: AluOperation,
    compatibility_mode: bool = False,
) -> tuple[int, int | None]:
    """Compute ``operation`` and return ``(result, flag)``.

    ``flag`` is ``None`` for operations that leave VF untouched. In
    compatibility mode the shifts read ``rhs`` (VY) instead of ``lhs`` (VX).
    """

    lhs &= 0xFF
    rhs &= 0xFF

    if operation is AluOperation.SET:
        return rhs, None
    if operation is AluOperation.ADD:
        total = lhs + rhs
        return total & 0xFF, 1 if total > 0xFF else 0
    if operation is AluOperation.SUB:
        return (lhs - rhs) & 0xFF, 1 if lhs >= rhs else 0
    if operation is AluOperation.SUB_REVERSE:
        return (rhs - lhs) & 0xFF, 1 if rhs >= lhs else 0
    if operation is AluOperation.OR:
        return lhs | rhs, None
    if operation is AluOperation.AND:
        return lhs & rhs, None
    if operation is AluOperation.XOR:
        return lhs ^ rhs, None
    if operation is AluOperation.SHIFT_LEFT:
        operand = rhs if compatibility_mode else lhs
        return (operand << 1) & 0xFF, (operand >> 7) & 0x01
    if operation is AluOperation.SHIFT_RIGHT:
        operand = rhs if compatibility_mode else lhs
        return operand >> 1, operand & 0x01
    raise ValueError(f"unsupported ALU operation: {operation}")
