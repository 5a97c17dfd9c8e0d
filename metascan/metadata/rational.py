from typing import NamedTuple

from .. import config


class Rational(NamedTuple):
    """An EXIF fraction as decoded. num/den are plain (unbounded) ints."""
    num: int
    den: int

    @property
    def is_valid(self) -> bool:
        return self.den != 0

    @property
    def is_integer(self) -> bool:
        return self.den != 0 and self.num % self.den == 0

    def to_float(self) -> float:
        return self.num / self.den


def exposure_precision(value: float) -> int:
    """Digits for an exposure time: 2, then one more below each threshold."""
    precision = config.DEFAULT_DECIMAL_PRECISION
    for threshold, digits in config.EXPOSURE_PRECISION_STEPS:
        if value < threshold:
            precision = digits
    return precision


def format_rational(value: Rational,
                    as_decimal: bool,
                    prefix: str = "",
                    is_exposure: bool = False) -> str:
    """
    Renders a fraction for display.

    - Zero denominator: "<prefix><num>/0 (Invalid)".
    - Decimal mode: fixed-point, 2 digits (exposure times get more as they shrink).
    - Fraction mode: "<prefix><num>" when den == 1, else "<prefix><num>/<den>".
    """
    if not value.is_valid:
        return f"{prefix}{value.num}/0 (Invalid)"

    if as_decimal:
        float_val = value.to_float()
        if is_exposure:
            precision = exposure_precision(float_val)
        else:
            precision = config.DEFAULT_DECIMAL_PRECISION
        return f"{prefix}{float_val:.{precision}f}"

    if value.den == 1:
        return f"{prefix}{value.num}"
    return f"{prefix}{value.num}/{value.den}"
