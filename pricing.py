import re
from decimal import Decimal, DecimalException, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Optional, Union

from config import settings

CENTS = Decimal("0.01")
MAX_DIGITS = 100


class PriceInputError(ValueError):
    """Raised when an amount cannot be turned into a shop price."""


def parse_price(price_text: str) -> Optional[Decimal]:
    """Parse Argentine price text (e.g. '$ 1.234,56' -> Decimal('1234.56')).

    Everything but digits and commas is dropped, then the first comma is
    read as the decimal separator. Returns None when nothing parseable is
    left.
    """
    if not price_text:
        return None
    cleaned = re.sub(r"[^0-9,]", "", price_text.strip()).replace(",", ".", 1)
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def format_ars(amount: Decimal) -> str:
    """Format an amount the es-AR way: '$1.234,56'."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 10)
        quantized = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    if quantized.is_zero():
        quantized = abs(quantized)  # no "-0,00"
    # Swap the separators of the en-US grouping through a placeholder
    text = f"{quantized:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"${text}"


class PriceConverter:
    """Applies the shop markup to a source price and formats it for display."""

    def __init__(self, markup_factor: Union[Decimal, str, float, None] = None):
        factor = settings.markup_factor if markup_factor is None else markup_factor
        self.markup_factor = Decimal(str(factor))

    def convert(self, amount: Union[Decimal, int, float]) -> str:
        try:
            value = Decimal(str(amount))
        except InvalidOperation as e:
            raise PriceInputError(f"Not a number: {amount!r}") from e

        if not value.is_finite():
            raise PriceInputError(f"Amount must be finite, got {amount!r}")
        if value < 0:
            raise PriceInputError(f"Amount must not be negative, got {amount!r}")
        if value.adjusted() >= MAX_DIGITS:
            raise PriceInputError(f"Amount has more than {MAX_DIGITS} integer digits")

        try:
            with localcontext() as ctx:
                ctx.prec = max(ctx.prec, value.adjusted() + self.markup_factor.adjusted() + 10)
                marked_up = value * self.markup_factor
            return format_ars(marked_up)
        except DecimalException as e:
            raise PriceInputError(f"Cannot format amount {amount!r}: {e!r}") from e
