"""
Simple configuration for the Flag Identifier.
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration class for the Flag Identifier."""

    # API Configuration
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")

    # Model Settings
    VISION_MODEL = os.environ.get("VISION_MODEL", "gpt-4o-mini")
    VISION_TEMPERATURE = 0.2
    VISION_MAX_TOKENS = 1500

    # Image Upload
    MAX_FILE_SIZE = 20 * 1024 * 1024  # 20MB
    # Base64 inflates payloads by a third; leave room for the JSON re-analyze body
    MAX_REQUEST_SIZE = MAX_FILE_SIZE * 4 // 3 + 1024 * 1024
    ALLOWED_MIME_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
    DEFAULT_IMAGE_PATH = os.path.join("static", "default-flag.jpg")

    # API Settings
    API_HOST = "0.0.0.0"
    API_PORT = 5001
    API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
    API_VERSION = "1.0.0"


# Module-level aliases
OPENAI_API_KEY = Config.OPENAI_API_KEY
VISION_MODEL = Config.VISION_MODEL
VISION_TEMPERATURE = Config.VISION_TEMPERATURE
VISION_MAX_TOKENS = Config.VISION_MAX_TOKENS
MAX_FILE_SIZE = Config.MAX_FILE_SIZE
MAX_REQUEST_SIZE = Config.MAX_REQUEST_SIZE
ALLOWED_MIME_TYPES = Config.ALLOWED_MIME_TYPES
DEFAULT_IMAGE_PATH = Config.DEFAULT_IMAGE_PATH
API_HOST = Config.API_HOST
API_PORT = Config.API_PORT
API_DEBUG = Config.API_DEBUG
API_VERSION = Config.API_VERSION
