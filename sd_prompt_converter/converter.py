import logging
from enum import Enum
from typing import NamedTuple

from .novelai import scan_a, serialize_a
from .pixai import scan_b, serialize_b
from .segment import Segment

logger = logging.getLogger(__name__)

NOVELAI_LABEL = "NovelAI"
PIXAI_LABEL = "PixAI / SD"


class Direction(Enum):
    A_TO_B = "A_TO_B"  # 2::tag:: -> (tag:2)
    B_TO_A = "B_TO_A"  # (tag:2) -> 2::tag::

    @property
    def source_label(self) -> str:
        return NOVELAI_LABEL if self is Direction.A_TO_B else PIXAI_LABEL

    @property
    def target_label(self) -> str:
        return PIXAI_LABEL if self is Direction.A_TO_B else NOVELAI_LABEL

    @property
    def label(self) -> str:
        return f"{self.source_label} → {self.target_label}"

    def toggled(self) -> "Direction":
        return Direction.B_TO_A if self is Direction.A_TO_B else Direction.A_TO_B


class ConversionResult(NamedTuple):
    result_text: str
    result_negative_text: str
    segments: list[Segment]


def split_by_sign(segments: list[Segment]) -> tuple[list[Segment], list[Segment]]:
    """
    Splits segments into (positive, negative) lists.
    Negative-weight segments are copied with the sign stripped; the input is not modified.
    """
    positive: list[Segment] = []
    negative: list[Segment] = []
    for segment in segments:
        if segment.weight < 0:
            negative.append(segment.with_weight(abs(segment.weight)))
        else:
            positive.append(segment)
    return positive, negative


def negate(segments: list[Segment]) -> list[Segment]:
    return [segment.with_weight(-segment.weight + 0.0) for segment in segments]


def convert(
    source_text: str | None,
    source_negative_text: str | None,
    direction: Direction,
) -> ConversionResult:
    """
    Converts prompt text between the two syntaxes.

    A_TO_B: NovelAI has a single field where weights may be negative. Tags
    with a negative weight move to the negative prompt with the sign stripped.
    A non-empty source_negative_text (NovelAI's undesired content) is scanned
    as NovelAI too and placed first in the negative prompt.
    The returned segments are the scanned source, signs intact.

    B_TO_A: the negative prompt is folded back into the single NovelAI field
    as "-N::tag::" tokens after the positive tags. result_negative_text is "".
    """
    direction = Direction(direction)

    if direction is Direction.A_TO_B:
        segments = scan_a(source_text)
        positive, negative = split_by_sign(segments)
        negative = scan_a(source_negative_text) + negative
        result = ConversionResult(serialize_b(positive), serialize_b(negative), segments)
    else:
        segments = scan_b(source_text) + negate(scan_b(source_negative_text))
        result = ConversionResult(serialize_a(segments), "", segments)

    logger.debug(
        f"Converted {direction.value}: {len(result.segments)} segments, "
        f"result '{result.result_text}', negative '{result.result_negative_text}'"
    )
    return result


def swap(direction: Direction, result: ConversionResult) -> tuple[Direction, str, str]:
    """
    Toggles the direction, feeding the previous result back in as the new source.
    Returns (new_direction, new_source_text, new_source_negative_text).
    """
    return Direction(direction).toggled(), result.result_text, result.result_negative_text


def convert_for_generation(prompt: str | None, negative_prompt: str | None) -> tuple[str, str]:
    """
    Rewrites a NovelAI-syntax prompt for SD WebUI generation.
    Negative-weight tags are appended to the existing negative prompt.
    """
    result = convert(prompt, None, Direction.A_TO_B)
    negative_parts = [part for part in ((negative_prompt or "").strip(), result.result_negative_text) if part]
    return result.result_text, ", ".join(negative_parts)
