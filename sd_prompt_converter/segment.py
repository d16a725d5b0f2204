import math
import sys
from dataclasses import dataclass, replace
from decimal import Context, Decimal, ROUND_HALF_UP
from enum import Enum

from .config import WEIGHT_DECIMALS

_QUANTUM = Decimal(1).scaleb(-WEIGHT_DECIMALS)
# Wide enough to quantize sys.float_info.max to two decimals.
_ROUNDING_CONTEXT = Context(prec=400)


class SegmentKind(Enum):
    TEXT = "text"
    WEIGHT = "weight"


@dataclass(frozen=True)
class Segment:
    """
    One tag of a prompt with its resolved weight.
    - text: the tag content, already un-escaped, never empty after stripping.
    - weight: finite multiplier; 1.0 means no emphasis.
    """
    text: str
    weight: float = 1.0

    @property
    def kind(self) -> SegmentKind:
        return SegmentKind.TEXT if self.weight == 1.0 else SegmentKind.WEIGHT

    def with_weight(self, weight: float) -> "Segment":
        return replace(self, weight=weight)


def round_weight(value: float) -> float:
    """
    Rounds a weight half-away-from-zero to WEIGHT_DECIMALS places.
    The shortest repr of the float is rounded rather than its binary value,
    so 1.05 ** 2 (1.1025000000000003) gives 1.1 and 1.125 gives 1.13.
    Infinities are clamped to the largest finite float, NaN becomes 1.0.
    """
    if math.isnan(value):
        return 1.0
    if math.isinf(value):
        value = math.copysign(sys.float_info.max, value)
    quantized = Decimal(repr(float(value))).quantize(
        _QUANTUM, rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT
    )
    # + 0.0 turns -0.0 into 0.0
    return float(quantized) + 0.0


def parse_weight(literal: str | None) -> float | None:
    """Returns the literal as a finite float, or None if it is not one."""
    if literal is None:
        return None
    try:
        value = float(literal)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def format_weight(value: float) -> str:
    """Renders a weight without exponent or trailing zeros: 2.0 -> "2", 1.30 -> "1.3"."""
    number = Decimal(repr(float(value))).normalize(_ROUNDING_CONTEXT)
    text = format(number, "f")
    return "0" if text == "-0" else text
