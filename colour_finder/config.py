from __future__ import annotations
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_SAMPLE_SIZE = 16


def sample_size() -> tuple[int, int]:
    """(width, height) of the grid colours are computed on."""
    width = int(os.getenv("COLOUR_SAMPLE_WIDTH", str(DEFAULT_SAMPLE_SIZE)))
    height = int(os.getenv("COLOUR_SAMPLE_HEIGHT", str(DEFAULT_SAMPLE_SIZE)))
    return width, height


def allowed_extensions() -> set[str]:
    raw = os.getenv("ALLOWED_EXTENSIONS", "png,jpg,jpeg,gif,bmp,webp")
    return {ext.strip().lower().lstrip(".") for ext in raw.split(",") if ext.strip()}


def max_upload_bytes() -> int:
    return int(os.getenv("MAX_UPLOAD_SIZE_MB", "20")) * 1024 * 1024


def api_server_port() -> int:
    return int(os.getenv("API_SERVER_PORT", "5002"))


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
