"""Configuration settings for the LexiLens enrichment job and analysis relay."""

import os
from pathlib import Path

from dotenv import load_dotenv

from lexilens import __version__
from lexilens.errors import ConfigError

load_dotenv()

# Base paths
PROJECT_ROOT = Path(__file__).parent
DATA_DIR = PROJECT_ROOT / "data"
CHUNKS_DIR = PROJECT_ROOT / "output"  # One <offset>.json per processed chunk
LOGS_DIR = PROJECT_ROOT / "logs"

# Input/Output files
WORD_LIST_TXT = DATA_DIR / "cached_words.txt"
COMBINED_OUTPUT_JSON = PROJECT_ROOT / "all_dic.json"

# Credentials (read from the environment / .env)
GEMINI_API_KEY_ENV = "GEMINI_API_KEY"
MISTRAL_API_KEY_ENV = "MISTRAL_API_KEY"

# Gemini settings
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
ENRICHMENT_MAX_OUTPUT_TOKENS = 8192
ENRICHMENT_TEMPERATURE = 1.0

# Mistral settings
MISTRAL_API_URL = "https://api.mistral.ai/v1/chat/completions"
MISTRAL_VISION_MODEL = os.getenv("MISTRAL_VISION_MODEL", "pixtral-large-latest")
MISTRAL_TEXT_MODEL = os.getenv("MISTRAL_TEXT_MODEL", "mistral-large-latest")
MISTRAL_MAX_TOKENS = 1024
MISTRAL_TEMPERATURE = 0.8
MISTRAL_TIMEOUT = 120  # seconds
MISTRAL_MAX_RETRIES = 3

# Batch processing settings
DEFAULT_CHUNK_SIZE = 100
SMALL_CHUNK_SIZE = 50
CHUNK_DELAY_RANGE = (1, 3)  # seconds, inclusive
DRY_RUN_LIMIT = DEFAULT_CHUNK_SIZE

# Image preprocessing
JPEG_QUALITY = 30

# Relay service settings
RELAY_HOST = os.getenv("RELAY_HOST", "0.0.0.0")
RELAY_PORT = int(os.getenv("RELAY_PORT", "9081"))
SERVICE_VERSION = __version__
RATE_LIMIT_MAX_REQUESTS = 10
RATE_LIMIT_WINDOW_SECONDS = 60


def require_env(name: str) -> str:
    """Return a required environment value.

    Raises:
        ConfigError: If the variable is unset or blank.
    """
    value = os.getenv(name, "").strip()
    if not value:
        raise ConfigError(f"{name} environment variable not set")
    return value
