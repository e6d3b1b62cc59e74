from typing import Dict, Any
import os
from dotenv import load_dotenv

load_dotenv()

# Base configuration for all generation calls
BASE_MODEL_CONFIG = {
    "backend_url": os.getenv("CINEMIND_BACKEND_URL", "http://localhost:5000/api/generate"),
    "text_model": os.getenv("CINEMIND_TEXT_MODEL", "gemini-3-pro-preview"),
    "image_model": os.getenv("CINEMIND_IMAGE_MODEL", "gemini-2.5-flash-image"),
    "timeout": float(os.getenv("CINEMIND_REQUEST_TIMEOUT", "300")),
    "max_attempts": int(os.getenv("CINEMIND_MAX_ATTEMPTS", "3")),
}

def get_model_config() -> Dict[str, Any]:
    """Get model configuration."""
    return BASE_MODEL_CONFIG.copy()

def get_api_key() -> str:
    """Server-side provider key, API_KEY first then GOOGLE_API_KEY."""
    return os.getenv("API_KEY") or os.getenv("GOOGLE_API_KEY") or ""

SERVER_PORT = int(os.getenv("PORT", "5000"))

# Upstream artifacts are cut to these budgets before prompting
MAX_CONTEXT_CHARS = 50000
MAX_STORYBOARD_CONTEXT_CHARS = 10000

STORYBOARD_PROMPT_COUNT = 4
IMAGE_STYLE_SUFFIX = ", cinematic lighting, photorealistic, movie still, 8k, detailed"
IMAGE_ASPECT_RATIO = "16:9"

DEFAULT_LANGUAGE = "English"
LANGUAGES = [
    "English",
    "Spanish",
    "French",
    "German",
    "Italian",
    "Japanese",
    "Korean",
    "Chinese (Mandarin)",
    "Hindi",
    "Portuguese",
]

# System instructions per pipeline role
AGENT_INSTRUCTIONS = {
    "scriptwriter": "You are a professional screenwriter. You write vivid action and realistic dialogue.",

    "director": "You are a visionary film director known for strong structural storytelling and cultural authenticity.",

    "cinematographer": "You are a master of light and composition. You speak in visual terms.",

    "producer": "You are the reality check. You care about budget, schedule, and marketability.",

    "editor": "You are the final rewrite. You control time and tension.",

    "marketing": "You sell the dream. You are hype, precision, and audience psychology.",

    "storyboard": "You are a master cinematic storyboard artist. You reduce a film to its most iconic frames.",
}
