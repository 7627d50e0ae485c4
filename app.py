import os
import logging
from datetime import datetime
from flask import Flask, request, jsonify, render_template
from flask_cors import CORS

# Import configuration and processing functions
from config import API_HOST, API_PORT, API_DEBUG, API_VERSION, MAX_REQUEST_SIZE, DEFAULT_IMAGE_PATH
from constants import DEFAULT_ANALYSIS, FLAG_ANALYSIS_PROMPT, IMAGE_TOO_LARGE_MESSAGE
from ai_processor import analyze_image, ServiceError
from formatter import format_analysis, format_analysis_payload
from schemas import AnalysisState
from utils import IntakeError, read_image_upload, parse_data_uri, load_image_file, log_error_and_return

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# --- FLASK APP SETUP ---
app = Flask(__name__)
CORS(app)  # Cross-Origin Resource Sharing configuration for frontend compatibility

app.config['MAX_CONTENT_LENGTH'] = MAX_REQUEST_SIZE

logger.info("Flask application initialized")


# --- HELPERS ---

def load_default_state():
    """Bootstrap state: the canned analysis and the bundled default image, no AI call."""
    image = load_image_file(os.path.join(app.root_path, DEFAULT_IMAGE_PATH))
    if image is None:
        logger.warning("Default flag image not available, starting without an image")
    return AnalysisState().begin().succeed(image, DEFAULT_ANALYSIS)


def state_payload(state):
    payload = state.model_dump()
    payload["segments"] = format_analysis_payload(state.analysis)
    return payload


def read_request_image():
    """Encoded image from a multipart upload or a JSON {"image": data_uri} body."""
    if request.files:
        return read_image_upload(request.files.get('file'))

    data = request.get_json(silent=True)
    if isinstance(data, dict) and 'image' in data:
        return parse_data_uri(data['image'])

    raise IntakeError("No file provided")


# --- PAGES ---

@app.route('/', methods=['GET'])
def index():
    state = load_default_state()
    return render_template('index.html', state=state, segments=format_analysis(state.analysis))


# --- API ENDPOINTS ---

@app.route('/ping', methods=['GET'])
def ping():
    """
    Health check endpoint to verify the server is running.
    Returns server status and timestamp.
    """
    return jsonify({
        "status": "ok",
        "message": "Flag Identifier API is running",
        "timestamp": datetime.now().isoformat(),
        "version": API_VERSION
    }), 200


@app.route('/default', methods=['GET'])
def default_analysis():
    """Default image and analysis shown before any upload."""
    return jsonify(state_payload(load_default_state())), 200


@app.route('/analyze', methods=['POST'])
def analyze_flag():
    """
    Handles a flag photo upload (or re-analysis of the current image) and
    returns the analysis with its formatted segments.
    """
    state = AnalysisState().begin()

    try:
        image = read_request_image()
    except IntakeError as e:
        # Rejected before any request is made
        error, status_code = log_error_and_return(str(e), 400)
        return jsonify(error), status_code

    try:
        analysis = analyze_image(image, FLAG_ANALYSIS_PROMPT)
    except ServiceError as e:
        logger.error(f"Flag analysis failed: {str(e)}")
        return jsonify(state_payload(state.fail(str(e)))), 502
    except Exception as e:
        error, status_code = log_error_and_return(f"An error occurred during analysis: {str(e)}")
        return jsonify(error), status_code

    state = state.succeed(image, analysis)
    logger.info("Flag analysis completed successfully")
    return jsonify(state_payload(state)), 200


@app.route('/format', methods=['POST'])
def format_text():
    """Formats an analysis text into segments without calling the AI service."""
    data = request.get_json(silent=True)
    text = data.get('text') if isinstance(data, dict) else None

    if not isinstance(text, str):
        return jsonify({"error": "Missing 'text' in request body"}), 400

    return jsonify({"segments": format_analysis_payload(text)}), 200


@app.errorhandler(413)
def request_too_large(e):
    logger.warning("Rejected upload larger than the request size limit")
    return jsonify({"error": IMAGE_TOO_LARGE_MESSAGE}), 413


# --- RUN THE APP ---
if __name__ == '__main__':
    # Application server configuration
    logger.info(f"Starting Flag Identifier API on {API_HOST}:{API_PORT}")
    app.run(host=API_HOST, port=API_PORT, debug=API_DEBUG)
