# Converts prompts between NovelAI "N::tag::" / {} [] syntax
# and PixAI / SD WebUI "(tag:weight)" / () [] syntax.

from .converter import ConversionResult, Direction, convert, convert_for_generation, swap
from .novelai import scan_a, serialize_a
from .pixai import scan_b, serialize_b
from .segment import Segment, SegmentKind

__all__ = [
    "ConversionResult",
    "Direction",
    "Segment",
    "SegmentKind",
    "convert",
    "convert_for_generation",
    "scan_a",
    "scan_b",
    "serialize_a",
    "serialize_b",
    "swap",
]
