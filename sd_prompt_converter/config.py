import logging
import os

EXTENSION_NAME = "Prompt Syntax Converter"
EXTENSION_VERSION = "1.0.0"

# NovelAI: each {} level multiplies by 1.05, each [] level by 0.95
NAI_CURLY_FACTOR = 1.05
NAI_SQUARE_FACTOR = 0.95
# PixAI / SD WebUI: each () level multiplies by 1.1, each [] level by 0.9
SD_PAREN_FACTOR = 1.1
SD_SQUARE_FACTOR = 0.9

WEIGHT_DECIMALS = 2

DEFAULT_SERVER_NAME = "127.0.0.1"
DEFAULT_SERVER_PORT = 7861
DEFAULT_DIRECTION = "A_TO_B"

logger = logging.getLogger(__name__)


def get_server_name() -> str:
    host = os.environ.get("PROMPT_CONVERTER_HOST")
    return host.strip() if isinstance(host, str) and host.strip() else DEFAULT_SERVER_NAME


def get_server_port() -> int:
    port = os.environ.get("PROMPT_CONVERTER_PORT")
    if not port or not port.strip():
        return DEFAULT_SERVER_PORT
    try:
        value = int(port.strip())
    except ValueError:
        logger.warning(f"{EXTENSION_NAME}: Ignoring malformed PROMPT_CONVERTER_PORT '{port}'")
        return DEFAULT_SERVER_PORT
    if not 0 < value < 65536:
        logger.warning(f"{EXTENSION_NAME}: PROMPT_CONVERTER_PORT {value} out of range")
        return DEFAULT_SERVER_PORT
    return value


def get_default_direction() -> str:
    """Name of the starting Direction member, from PROMPT_CONVERTER_DIRECTION."""
    direction = (os.environ.get("PROMPT_CONVERTER_DIRECTION") or "").strip().upper()
    return direction if direction in ("A_TO_B", "B_TO_A") else DEFAULT_DIRECTION
