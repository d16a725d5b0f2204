import re

from .config import NAI_CURLY_FACTOR, NAI_SQUARE_FACTOR
from .segment import Segment, SegmentKind, format_weight, parse_weight, round_weight

# "2::", "-1::", "0.5::" or a bare "::"
_WEIGHT_CONTROL = re.compile(r"(-?\d*(?:\.\d+)?)::")


def _resolve_weight(base_weight: float, curly_depth: int, square_depth: int) -> float:
    if base_weight == 0:
        return 0.0
    try:
        weight = base_weight * NAI_CURLY_FACTOR ** curly_depth * NAI_SQUARE_FACTOR ** square_depth
    except OverflowError:
        weight = float("inf") if base_weight >= 0 else float("-inf")
    return round_weight(weight)


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def scan_a(text: str | None) -> list[Segment]:
    """
    Parses NovelAI-style prompt text into segments.
    - "N::" sets a persistent base weight, a bare "::" resets it to 1.0.
      Either token also resets both bracket depths to zero.
    - Each "{" level multiplies the weight by 1.05, each "[" level by 0.95.
      Depths have no floor: after a "::" reset, closing brackets drive
      them negative and lower the weight of the tags that follow.
    - Commas split tags; weight state carries over into the next tag.
    A number glued to the end of a word ("tag1::") is tag text, not a weight.
    Never raises: malformed weight numbers count as a bare "::".
    """
    if not text:
        return []

    segments: list[Segment] = []
    base_weight = 1.0
    curly_depth = 0
    square_depth = 0
    buffer: list[str] = []

    def flush():
        content = "".join(buffer).strip()
        buffer.clear()
        if content:
            segments.append(Segment(content, _resolve_weight(base_weight, curly_depth, square_depth)))

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        glued_number = char in "-.0123456789" and i > 0 and _is_word_char(text[i - 1])
        match = None if glued_number else _WEIGHT_CONTROL.match(text, i)
        if match:
            flush()  # resolved with the pre-token state
            weight = parse_weight(match.group(1)) if match.group(1) else None
            base_weight = weight if weight is not None else 1.0
            curly_depth = 0
            square_depth = 0
            i = match.end()
            continue

        if char == "{":
            flush()
            curly_depth += 1
        elif char == "}":
            flush()
            curly_depth -= 1
        elif char == "[":
            flush()
            square_depth += 1
        elif char == "]":
            flush()
            square_depth -= 1
        elif char == ",":
            flush()
        else:
            buffer.append(char)
        i += 1

    flush()
    return segments


def serialize_a(segments: list[Segment]) -> str:
    """Renders segments as NovelAI text, using explicit "N::tag::" for weighted tags."""
    rendered = []
    for segment in segments:
        content = segment.text.strip() if segment.text else ""
        if not content:
            continue
        if segment.kind is SegmentKind.TEXT or segment.weight == 1:
            rendered.append(segment.text)
        else:
            rendered.append(f"{format_weight(segment.weight)}::{segment.text}::")
    return ", ".join(rendered)
