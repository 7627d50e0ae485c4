"""
Utility functions for the Flag Identifier: image intake and error responses.
"""
import base64
import binascii
import logging
from werkzeug.utils import secure_filename

from config import ALLOWED_MIME_TYPES, MAX_FILE_SIZE
from constants import (
    IMAGE_SIGNATURES, INVALID_IMAGE_MESSAGE,
    IMAGE_TOO_LARGE_MESSAGE, UNREADABLE_IMAGE_MESSAGE
)

logger = logging.getLogger(__name__)


class IntakeError(ValueError):
    """Raised when an uploaded image is rejected before analysis."""


def validate_image_file(file):
    """
    Validate an uploaded image file.

    Args:
        file: Uploaded file object

    Returns:
        tuple: (is_valid, error_message)
    """
    if file is None:
        return False, "No file provided"

    if file.filename == '':
        return False, "No file selected"

    if normalize_mime_type(file.mimetype) not in ALLOWED_MIME_TYPES:
        return False, INVALID_IMAGE_MESSAGE

    return True, ""


def normalize_mime_type(mime_type):
    """Lower-case a MIME type and map the image/jpg alias to image/jpeg."""
    mime_type = (mime_type or "").split(";")[0].strip().lower()
    return "image/jpeg" if mime_type == "image/jpg" else mime_type


def sniff_mime_type(raw):
    """Detect JPEG, PNG or WEBP from magic bytes; None for anything else."""
    for mime_type, signature in IMAGE_SIGNATURES.items():
        if raw.startswith(signature):
            return mime_type
    if len(raw) >= 12 and raw[0:4] == b"RIFF" and raw[8:12] == b"WEBP":
        return "image/webp"
    return None


def check_image_bytes(raw):
    """
    Check decoded image bytes against the size limit and accepted formats.

    Returns:
        str: the detected MIME type
    """
    if not raw:
        raise IntakeError(UNREADABLE_IMAGE_MESSAGE)

    if len(raw) > MAX_FILE_SIZE:
        raise IntakeError(IMAGE_TOO_LARGE_MESSAGE)

    mime_type = sniff_mime_type(raw)
    if mime_type is None:
        raise IntakeError(INVALID_IMAGE_MESSAGE)
    return mime_type


def encode_image(raw, mime_type):
    """Encode image bytes as a data URI."""
    payload = base64.b64encode(raw).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def read_image_upload(file):
    """
    Validate an uploaded file and encode it for the AI service.

    Args:
        file: werkzeug FileStorage from the multipart request

    Returns:
        str: data URI of the image

    Raises:
        IntakeError: if the file is missing, of the wrong type or too large
    """
    is_valid, error_message = validate_image_file(file)
    if not is_valid:
        raise IntakeError(error_message)

    try:
        raw = file.read(MAX_FILE_SIZE + 1)
    except OSError as e:
        logger.error(f"Failed to read upload {get_secure_filename(file.filename)}: {str(e)}")
        raise IntakeError(UNREADABLE_IMAGE_MESSAGE) from e

    mime_type = check_image_bytes(raw)
    logger.info(f"Accepted upload {get_secure_filename(file.filename)} ({mime_type}, {len(raw)} bytes)")
    return encode_image(raw, mime_type)


def parse_data_uri(data_uri):
    """
    Validate a client-supplied data URI, e.g. when re-analyzing the current image.

    Returns:
        str: the data URI rebuilt from the decoded bytes
    """
    if not isinstance(data_uri, str) or not data_uri.startswith("data:"):
        raise IntakeError(INVALID_IMAGE_MESSAGE)

    header, sep, payload = data_uri[len("data:"):].partition(",")
    if not sep or not header.endswith(";base64"):
        raise IntakeError(INVALID_IMAGE_MESSAGE)

    declared_type = normalize_mime_type(header[:-len(";base64")])
    if declared_type not in ALLOWED_MIME_TYPES:
        raise IntakeError(INVALID_IMAGE_MESSAGE)

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise IntakeError(UNREADABLE_IMAGE_MESSAGE) from e

    return encode_image(raw, check_image_bytes(raw))


def load_image_file(filepath):
    """Read an image from disk as a data URI, or None if it is missing or invalid."""
    try:
        with open(filepath, "rb") as f:
            raw = f.read()
        return encode_image(raw, check_image_bytes(raw))
    except OSError as e:
        logger.warning(f"Could not read image {filepath}: {str(e)}")
    except IntakeError as e:
        logger.warning(f"Ignoring image {filepath}: {str(e)}")
    return None


def get_secure_filename(original_filename):
    """
    Get a filename that is safe to log.

    Args:
        original_filename: Original filename from upload

    Returns:
        str: Secure filename
    """
    return secure_filename(original_filename or "") or "upload"


def log_error_and_return(error_msg, status_code=500):
    """
    Log an error and return a formatted error response.

    Args:
        error_msg: Error message to log and return
        status_code: HTTP status code

    Returns:
        tuple: (error_dict, status_code)
    """
    logger.error(error_msg)
    return {"error": error_msg}, status_code
