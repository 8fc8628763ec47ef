"""Price display helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation

CURRENCY_SYMBOL = "$"
_CENTS = Decimal("0.01")


def format_price(value: float, *, symbol: str = CURRENCY_SYMBOL) -> str:
    """Render ``value`` with exactly two decimals, rounding half-up.

    Rounding is applied to the shortest decimal representation of the float,
    so ``9.995`` becomes ``$10.00`` even though the binary value is slightly
    below it.
    """

    try:
        amount = Decimal(repr(float(value)))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"Cannot format price {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Cannot format price {value!r}")
    # Precision must cover every integer digit plus the two cents digits.
    context = Context(prec=max(28, amount.adjusted() + 3))
    try:
        rounded = amount.quantize(_CENTS, rounding=ROUND_HALF_UP, context=context)
    except InvalidOperation as exc:
        raise ValueError(f"Cannot format price {value!r}") from exc
    return f"{symbol}{rounded}"


__all__ = ["CURRENCY_SYMBOL", "format_price"]
