"""Tests for the Flask endpoints (fake model, no network)."""

from __future__ import annotations

import io

import pytest

import ai_processor
import app as app_module
from app import app, load_default_state
from constants import DEFAULT_ANALYSIS, IMAGE_TOO_LARGE_MESSAGE, INVALID_IMAGE_MESSAGE
from utils import encode_image
from tests.conftest import GIF_BYTES, PNG_BYTES, SAMPLE_ANALYSIS, FakeVisionLLM


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def _multipart(raw, filename="flag.png", content_type="image/png"):
    return {"file": (io.BytesIO(raw), filename, content_type)}


def test_ping(client):
    response = client.get("/ping")
    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "ok"
    assert data["version"] == "1.0.0"


def test_index_renders_default_analysis(client):
    response = client.get("/")
    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert "Flag Analysis Results" in html
    assert "Flag Identification:" in html
    assert "Aspect Ratio:" in html


def test_default_endpoint(client):
    response = client.get("/default")
    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "ready"
    assert data["analysis"] == DEFAULT_ANALYSIS
    assert data["segments"][0] == {"type": "section_header", "title": "Flag Identification:"}


def test_default_state_uses_bundled_image(monkeypatch, tmp_path):
    image_path = tmp_path / "default-flag.png"
    image_path.write_bytes(PNG_BYTES)
    monkeypatch.setattr(app_module, "DEFAULT_IMAGE_PATH", str(image_path))

    state = load_default_state()
    assert state.image == encode_image(PNG_BYTES, "image/png")
    assert state.analysis == DEFAULT_ANALYSIS


def test_default_state_without_image(monkeypatch, tmp_path):
    monkeypatch.setattr(app_module, "DEFAULT_IMAGE_PATH", str(tmp_path / "missing.jpg"))
    state = load_default_state()
    assert state.status == "ready"
    assert state.image is None


def test_default_state_ships_with_flag_image():
    state = load_default_state()
    assert state.image is not None
    assert state.image.startswith("data:image/jpeg;base64,")
    assert state.status == "ready"


def test_default_endpoint_includes_image(client):
    data = client.get("/default").get_json()
    assert data["image"].startswith("data:image/jpeg;base64,")


def test_index_enables_identify_button(client):
    html = client.get("/").get_data(as_text=True)
    assert 'src="data:image/jpeg;base64,' in html
    assert 'id="analyze-button" disabled' not in html


def test_analyze_upload(client, fake_llm):
    response = client.post("/analyze", data=_multipart(PNG_BYTES), content_type="multipart/form-data")
    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "ready"
    assert data["error"] is None
    assert data["image"] == encode_image(PNG_BYTES, "image/png")
    assert data["analysis"] == SAMPLE_ANALYSIS
    assert data["segments"][1] == {"type": "labeled_field", "label": "Country", "value": "France"}
    assert len(fake_llm.calls) == 1


def test_reanalyze_data_uri(client, fake_llm):
    image = encode_image(PNG_BYTES, "image/png")
    response = client.post("/analyze", json={"image": image})
    assert response.status_code == 200
    assert response.get_json()["image"] == image


def test_invalid_type_rejected_before_request(client, fake_llm):
    response = client.post(
        "/analyze",
        data=_multipart(GIF_BYTES, filename="flag.gif", content_type="image/gif"),
        content_type="multipart/form-data",
    )
    assert response.status_code == 400
    assert response.get_json() == {"error": INVALID_IMAGE_MESSAGE}
    assert fake_llm.calls == []


def test_missing_image(client, fake_llm):
    response = client.post("/analyze", json={})
    assert response.status_code == 400
    assert response.get_json() == {"error": "No file provided"}
    assert fake_llm.calls == []


@pytest.mark.parametrize("body", ["image/png", ["image"], 42, None])
def test_non_object_json_body(client, fake_llm, body):
    response = client.post("/analyze", json=body)
    assert response.status_code == 400
    assert response.get_json() == {"error": "No file provided"}
    assert fake_llm.calls == []


def test_upload_without_filename(client, fake_llm):
    response = client.post(
        "/analyze",
        data=_multipart(PNG_BYTES, filename=""),
        content_type="multipart/form-data",
    )
    assert response.status_code == 400
    assert response.get_json() == {"error": "No file selected"}
    assert fake_llm.calls == []


def test_service_error_surfaced(client, monkeypatch):
    llm = FakeVisionLLM(error=RuntimeError("Error code: 429 - rate limit exceeded"))
    monkeypatch.setattr(ai_processor, "get_vision_llm", lambda: llm)

    response = client.post("/analyze", data=_multipart(PNG_BYTES), content_type="multipart/form-data")
    assert response.status_code == 502
    data = response.get_json()
    assert data["status"] == "failed"
    assert data["error"] == "Error code: 429 - rate limit exceeded"
    assert data["segments"] == []


def test_request_too_large(client, monkeypatch):
    monkeypatch.setitem(app.config, "MAX_CONTENT_LENGTH", 16)
    response = client.post("/analyze", data=_multipart(PNG_BYTES), content_type="multipart/form-data")
    assert response.status_code == 413
    assert response.get_json() == {"error": IMAGE_TOO_LARGE_MESSAGE}


def test_format_endpoint(client):
    response = client.post("/format", json={"text": "1. Design\n\n- Colors: Red: dark"})
    assert response.status_code == 200
    assert response.get_json() == {"segments": [
        {"type": "section_header", "title": "Design"},
        {"type": "labeled_field", "label": "Colors", "value": "Red: dark"},
    ]}


@pytest.mark.parametrize("body", [{}, {"text": 5}, ["text"]])
def test_format_requires_text(client, body):
    response = client.post("/format", json=body)
    assert response.status_code == 400
