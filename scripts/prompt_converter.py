import logging

import gradio as gr
import modules.scripts as scripts

from sd_prompt_converter.config import EXTENSION_NAME, EXTENSION_VERSION
from sd_prompt_converter.converter import Direction, convert_for_generation
from sd_prompt_converter.ui import build_converter, make_element_id

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class PromptConverterScript(scripts.Script):
    def title(self):
        return f"{EXTENSION_NAME} v{EXTENSION_VERSION}"

    def show(self, is_img2img):
        return scripts.AlwaysVisible

    def ui(self, is_img2img):
        with gr.Accordion(f"{EXTENSION_NAME}", open=False, elem_id=make_element_id("accordion")):
            convert_prompt_checkbox = gr.Checkbox(
                label="Convert NovelAI syntax in the prompt to SD syntax before generation",
                value=False,
                elem_id=make_element_id("convert_prompt_checkbox"),
            )
            gr.Markdown("---")
            build_converter(Direction.A_TO_B)

        # Order matches the args of process()
        return [convert_prompt_checkbox]

    def process(self, p, convert_prompt_checkbox_val):
        """
        Called before the prompt is processed for image generation.
        'p' is the StableDiffusionProcessingTxt2Img / Img2Img object.
        """
        if not convert_prompt_checkbox_val or not p.prompt:
            return

        logger.info(f"{EXTENSION_NAME}: Initial prompt: '{p.prompt}'")
        negative_prompt = getattr(p, "negative_prompt", "") or ""
        p.prompt, p.negative_prompt = convert_for_generation(p.prompt, negative_prompt)
        logger.info(f"{EXTENSION_NAME}: Converted prompt: '{p.prompt}'")
        logger.info(f"{EXTENSION_NAME}: Converted negative_prompt: '{p.negative_prompt}'")
