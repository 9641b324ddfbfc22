"""
sharecount/core/formatting.py
Abbreviates share counts for display: 1234 → "1.2k", 1500000 → "1.5m".
Arithmetic is done in Decimal so 10**-n scaling never leaves float residue.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext

_THOUSAND = Decimal(1000)
_MILLION  = Decimal(1000000)


def _order_of_magnitude(n: int) -> int:
    """ceil(log10(n)) for n > 0, computed on the integer itself."""
    digits = len(str(n))
    return digits - 1 if n == 10 ** (digits - 1) else digits


def _plain(value: Decimal) -> str:
    text = format(value.normalize(), "f")
    return text if text != "-0" else "0"


def round_count(count, significant_digits: int) -> str:
    """
    Round `count` to `significant_digits` significant figures and abbreviate.

    Ties round half away from zero (1250 → "1.3k"). Negative counts keep
    their sign and are abbreviated by magnitude. Fractional input is
    truncated to an integer first.
    """
    num = int(count)
    if num == 0:
        return "0"

    power = significant_digits - _order_of_magnitude(abs(num))

    with localcontext() as ctx:
        # the scaled value carries up to significant_digits + len(num) digits
        ctx.prec = max(ctx.prec, significant_digits + len(str(abs(num))) + 2)
        shifted = Decimal(num).scaleb(power).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        value   = shifted.scaleb(-power)

        if abs(value) >= _MILLION:
            return _plain(value / _MILLION) + "m"
        if abs(value) >= _THOUSAND:
            return _plain(value / _THOUSAND) + "k"
        return _plain(value)
