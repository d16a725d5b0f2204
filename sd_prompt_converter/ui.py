import logging

import gradio as gr

from .config import (
    EXTENSION_NAME,
    EXTENSION_VERSION,
    get_default_direction,
    get_server_name,
    get_server_port,
)
from .converter import ConversionResult, Direction, convert, swap
from .highlight import COLOR_MAP, highlight_segments

logger = logging.getLogger(__name__)

NOTES_MARKDOWN = """
**Base weight (N::)**: in NovelAI syntax `2::` sets the base weight from that point on.
A bare `::` resets it to 1.0 and also discards any open `{}` / `[]` nesting.

**Brackets**: NovelAI `{}` is **x1.05** and `[]` is **x0.95** per level.
PixAI / SD `()` is **x1.1** and `[]` is **x0.9** per level. `(tag:1.3)` sets the weight directly.

**Negative weights**: NovelAI tags with a negative weight (`-1::tag::`) move to the PixAI
negative prompt. Going back, the negative prompt is folded in as `-N::tag::`.

All computed weights are rounded half away from zero to two decimals.
"""


def make_element_id(name: str) -> str:
    """Helper to create unique element IDs for this extension."""
    return f"psc-{name}"


def _formats_markdown(direction: Direction) -> str:
    return f"Source: **{direction.source_label}** | Result: **{direction.target_label}**"


def run_conversion(source_text: str, source_negative_text: str, direction_value: str):
    """
    Change handler for the source boxes.
    Returns (result_text, result_negative_text, highlighted_segments).
    """
    try:
        result = convert(source_text, source_negative_text, Direction(direction_value))
    except Exception as e:
        logger.error(f"{EXTENSION_NAME}: Error converting prompt: {e}", exc_info=True)
        return source_text or "", source_negative_text or "", []
    return result.result_text, result.result_negative_text, highlight_segments(result.segments)


def clear_sources():
    """Click handler for the clear button: empties both source boxes."""
    return "", ""


def toggle(direction_value: str, result_text: str, result_negative_text: str):
    """
    Click handler for the direction button: results become the new sources.
    Returns (direction_value, source_text, source_negative_text, button_label, formats_markdown).
    """
    previous = ConversionResult(result_text or "", result_negative_text or "", [])
    direction, source_text, source_negative_text = swap(Direction(direction_value), previous)
    logger.debug(f"{EXTENSION_NAME}: Direction switched to {direction.value}")
    return direction.value, source_text, source_negative_text, direction.label, _formats_markdown(direction)


def build_converter(direction: Direction | None = None) -> dict:
    """
    Creates and wires the converter components in the current gradio context.
    Returns the components by name.
    """
    direction = direction or Direction[get_default_direction()]

    direction_state = gr.State(direction.value)
    with gr.Row():
        toggle_button = gr.Button(direction.label, elem_id=make_element_id("toggle_button"))
    formats = gr.Markdown(_formats_markdown(direction), elem_id=make_element_id("formats"))
    with gr.Row():
        with gr.Column():
            source = gr.Textbox(
                label="Prompt (input)",
                lines=8,
                placeholder="2::1girl::, 1.5::sword, {shield}::  or  masterpiece, (1girl:2), (sword:1.5)",
                elem_id=make_element_id("source_textbox"),
            )
            source_negative = gr.Textbox(
                label="Negative prompt (input)",
                lines=3,
                elem_id=make_element_id("source_negative_textbox"),
            )
            clear_button = gr.Button("Clear", size="sm", elem_id=make_element_id("clear_button"))
        with gr.Column():
            result = gr.Textbox(
                label="Prompt (result)",
                lines=8,
                interactive=False,
                show_copy_button=True,
                elem_id=make_element_id("result_textbox"),
            )
            result_negative = gr.Textbox(
                label="Negative prompt (result)",
                lines=3,
                interactive=False,
                show_copy_button=True,
                elem_id=make_element_id("result_negative_textbox"),
            )
    analysis = gr.HighlightedText(
        label="Weight analysis",
        color_map=COLOR_MAP,
        combine_adjacent=False,
        show_legend=True,
        elem_id=make_element_id("analysis"),
    )
    gr.Markdown(NOTES_MARKDOWN)

    conversion_inputs = [source, source_negative, direction_state]
    conversion_outputs = [result, result_negative, analysis]
    source.change(fn=run_conversion, inputs=conversion_inputs, outputs=conversion_outputs)
    source_negative.change(fn=run_conversion, inputs=conversion_inputs, outputs=conversion_outputs)
    clear_button.click(fn=clear_sources, inputs=None, outputs=[source, source_negative])
    toggle_button.click(
        fn=toggle,
        inputs=[direction_state, result, result_negative],
        outputs=[direction_state, source, source_negative, toggle_button, formats],
    ).then(fn=run_conversion, inputs=conversion_inputs, outputs=conversion_outputs)

    return {
        "direction": direction_state,
        "toggle_button": toggle_button,
        "source": source,
        "source_negative": source_negative,
        "clear_button": clear_button,
        "result": result,
        "result_negative": result_negative,
        "analysis": analysis,
    }


def create_ui() -> gr.Blocks:
    with gr.Blocks(title=f"{EXTENSION_NAME} v{EXTENSION_VERSION}") as demo:
        gr.Markdown(f"## {EXTENSION_NAME}")
        build_converter()
    return demo


def main():
    logging.basicConfig(level=logging.INFO)
    demo = create_ui()
    logger.info(f"{EXTENSION_NAME}: Starting on {get_server_name()}:{get_server_port()}")
    demo.launch(server_name=get_server_name(), server_port=get_server_port())


if __name__ == "__main__":
    main()
