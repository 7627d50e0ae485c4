import logging
from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI

# Import configuration
from config import OPENAI_API_KEY, VISION_MODEL, VISION_TEMPERATURE, VISION_MAX_TOKENS

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

NO_ANALYSIS_MESSAGE = "No analysis was returned by the AI service"


class ServiceError(RuntimeError):
    """The AI service call failed; the message is shown to the user as-is."""


# --- INITIALIZATION ---

# Created on first use so the app can start without an API key
vision_llm = None


def get_vision_llm():
    """Return the shared vision chat model, creating it on first use."""
    global vision_llm
    if vision_llm is None:
        if not OPENAI_API_KEY:
            raise ServiceError("OpenAI API key is not configured")
        vision_llm = ChatOpenAI(
            openai_api_key=OPENAI_API_KEY,
            model=VISION_MODEL,
            temperature=VISION_TEMPERATURE,
            max_tokens=VISION_MAX_TOKENS,
            max_retries=0,
        )
    return vision_llm


# --- HELPER FUNCTIONS ---

def build_image_message(image_data, prompt):
    """Single user message carrying the prompt and the image data URI."""
    return HumanMessage(content=[
        {"type": "text", "text": prompt},
        {"type": "image_url", "image_url": {"url": image_data}},
    ])


def extract_text(content):
    """Pull plain text out of a chat response body."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


# --- MAIN PUBLIC FUNCTIONS ---

def analyze_image(image_data, prompt):
    """
    Send one encoded image and a prompt to the vision model and return its text.

    No retries and no streaming. Any client failure (network, non-success
    status) is re-raised as ServiceError with the original message, and an
    empty or non-text body is a ServiceError as well.
    """
    llm = get_vision_llm()

    try:
        logger.info(f"Requesting flag analysis from {VISION_MODEL}")
        response = llm.invoke([build_image_message(image_data, prompt)])
    except Exception as e:
        logger.error(f"Flag analysis request failed: {str(e)}")
        raise ServiceError(str(e)) from e

    text = extract_text(getattr(response, "content", None)).strip()
    if not text:
        logger.error("Flag analysis response had no text content")
        raise ServiceError(NO_ANALYSIS_MESSAGE)

    logger.info(f"Received flag analysis ({len(text)} characters)")
    return text
