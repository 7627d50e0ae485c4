"""Shared test fixtures."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

import ai_processor


# Only the magic bytes matter to intake
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 32
WEBP_BYTES = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 32
GIF_BYTES = b"GIF89a" + b"\x00" * 32

SAMPLE_ANALYSIS = """**1. Flag Identification:**
- Country: France
- Type: National flag

## 2. Design Elements
- Colors: Blue, White, Red
- Tricolour

The flag is often called *le drapeau tricolore*."""


class FakeVisionLLM:
    """Stands in for ChatOpenAI; records the messages it was invoked with."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def invoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.content)


@pytest.fixture
def fake_llm(monkeypatch):
    """Install a fake vision model returning SAMPLE_ANALYSIS."""
    llm = FakeVisionLLM(content=SAMPLE_ANALYSIS)
    monkeypatch.setattr(ai_processor, "get_vision_llm", lambda: llm)
    return llm


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES
