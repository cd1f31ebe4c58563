from __future__ import annotations

from decimal import Decimal, InvalidOperation

from eth_utils import to_wei

from .errors import ValidationError

MAX_UINT64 = (1 << 64) - 1


def decimal_to_wei(amount: str, unit: str, *, name: str) -> int:
    """
    Convert a decimal amount denominated in ``unit`` (ether, gwei, ...) to wei.

    Digits beyond wei precision are truncated.
    """
    s = (amount or "").strip()
    try:
        d = Decimal(s)
    except InvalidOperation as e:
        raise ValidationError(f"Invalid number for {name}: '{amount}'", flag=name, value=amount) from e
    if not d.is_finite():
        raise ValidationError(f"Invalid number for {name}: '{amount}'", flag=name, value=amount)
    if d < 0:
        raise ValidationError(f"{name} must not be negative", flag=name, value=amount)
    try:
        return to_wei(s, unit)
    except ValueError as e:
        raise ValidationError(f"Invalid amount for {name}: {e}", flag=name, value=amount) from e


def parse_uint(raw: str, *, name: str, maximum: int | None = None) -> int:
    s = (raw or "").strip()
    try:
        n = int(s, 10)
    except ValueError as e:
        raise ValidationError(f"Invalid integer for {name}: '{raw}'", flag=name, value=raw) from e
    if n < 0:
        raise ValidationError(f"{name} must not be negative", flag=name, value=raw)
    if maximum is not None and n > maximum:
        raise ValidationError(f"{name} must be at most {maximum}", flag=name, value=raw)
    return n
