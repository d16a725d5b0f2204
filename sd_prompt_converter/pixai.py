import re

from .config import SD_PAREN_FACTOR, SD_SQUARE_FACTOR
from .segment import Segment, format_weight, parse_weight, round_weight

# "(content:1.2)": content may hold escaped chars but no ":" and no bare parens
_EXPLICIT_WEIGHT = re.compile(
    r"\((?P<content>(?:\\.|[^:()\\])+):\s*(?P<weight>-?\d+(?:\.\d+)?)\s*\)",
    re.DOTALL,
)
_ESCAPED_CHAR = re.compile(r"\\([()\[\]:\\])")


def escape_tag(text: str, weighted: bool = False) -> str:
    """
    Escapes backslashes, parens and square brackets: ( -> \\(, \\ -> \\\\.
    Colons are escaped too when the tag goes inside "(tag:weight)".
    """
    special = r"([\\()\[\]:])" if weighted else r"([\\()\[\]])"
    return re.sub(special, r"\\\1", text)


def unescape_tag(text: str) -> str:
    r"""\( \) \[ \] \: \\ -> ( ) [ ] : \ ; any other backslash pair is left as is."""
    return _ESCAPED_CHAR.sub(r"\1", text)


def _resolve_weight(paren_depth: int, square_depth: int) -> float:
    try:
        weight = SD_PAREN_FACTOR ** paren_depth * SD_SQUARE_FACTOR ** square_depth
    except OverflowError:
        weight = float("inf")
    return round_weight(weight)


def scan_b(text: str | None) -> list[Segment]:
    """
    Parses PixAI / SD WebUI prompt text into segments.
    - "\\x" is copied verbatim and never read as a bracket.
    - "(tag:1.2)" is an explicit weight: taken literally, ignoring the
      brackets around it.
    - Otherwise each "(" level multiplies the weight by 1.1 and each "["
      level by 0.9. Closing brackets never take a depth below zero.
    - Commas split tags; "(tag1, tag2)" emphasizes both.
    Never raises.
    """
    if not text:
        return []

    segments: list[Segment] = []
    paren_depth = 0
    square_depth = 0
    buffer: list[str] = []

    def flush():
        content = unescape_tag("".join(buffer)).strip()
        buffer.clear()
        if content:
            segments.append(Segment(content, _resolve_weight(paren_depth, square_depth)))

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        if char == "\\" and i + 1 < length:
            buffer.append(text[i:i + 2])
            i += 2
            continue

        if char == "(":
            match = _EXPLICIT_WEIGHT.match(text, i)
            weight = parse_weight(match.group("weight")) if match else None
            if weight is not None:
                flush()
                content = unescape_tag(match.group("content")).strip()
                if content:
                    segments.append(Segment(content, weight + 0.0))
                i = match.end()
                continue
            flush()
            paren_depth += 1
        elif char == ")":
            flush()
            paren_depth = max(0, paren_depth - 1)
        elif char == "[":
            flush()
            square_depth += 1
        elif char == "]":
            flush()
            square_depth = max(0, square_depth - 1)
        elif char == ",":
            flush()
        else:
            buffer.append(char)
        i += 1

    flush()
    return segments


def serialize_b(segments: list[Segment]) -> str:
    """Renders segments as PixAI / SD text, "(tag:weight)" for weighted tags."""
    rendered = []
    for segment in segments:
        if not segment.text or not segment.text.strip():
            continue
        if segment.weight == 1.0:
            rendered.append(escape_tag(segment.text))
        else:
            rendered.append(f"({escape_tag(segment.text, weighted=True)}:{format_weight(segment.weight)})")
    return ", ".join(rendered)
