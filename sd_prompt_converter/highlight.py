from .segment import Segment, SegmentKind, format_weight

EMPHASIS = "emphasis"
DE_EMPHASIS = "de-emphasis"

# High weight: red, low weight: blue
COLOR_MAP = {
    EMPHASIS: "red",
    DE_EMPHASIS: "blue",
}


def weight_category(weight: float) -> str | None:
    if weight > 1.0:
        return EMPHASIS
    if weight < 1.0:
        return DE_EMPHASIS
    return None


def segment_label(segment: Segment) -> str:
    if segment.kind is SegmentKind.TEXT:
        return segment.text
    return f"{format_weight(segment.weight)}::{segment.text}"


def highlight_segments(segments: list[Segment]) -> list[tuple[str, str | None]]:
    """
    Builds the value of a gradio HighlightedText for the weight analysis panel.
    Weighted tags show as "weight::tag" tagged with their category, plain tags
    are left unlabelled. Tags are separated by unlabelled ", " spacers.
    """
    highlighted: list[tuple[str, str | None]] = []
    for index, segment in enumerate(segments):
        if index:
            highlighted.append((", ", None))
        highlighted.append((segment_label(segment), weight_category(segment.weight)))
    return highlighted
