import os
from unittest.mock import MagicMock

import pytest

# Required env vars for Config (set BEFORE any app imports)
_TEST_ENV = {
    "GEMINI_API_KEY": "test-gemini-key",
    "GEMINI_MODEL_NAME": "test-model",
    "IMAGE_SERVICE_URL": "https://pollinations.ai",
    "SOUNDSCAPE_VARIANT": "overlay",
}
for key, value in _TEST_ENV.items():
    os.environ[key] = value
os.environ.pop("IMAGE_STYLE", None)
os.environ.pop("IMAGE_SERVICE_TIMEOUT", None)


@pytest.fixture
def sample_prompt():
    """Sample soundscape prompt"""
    return "a calm lake"


@pytest.fixture
def overlay_model_text():
    """Fenced Gemini answer for the overlay variant"""
    return (
        "```json\n"
        '{"sounds": ["forest.mp3", "wind.mp3"], '
        '"p5Code": "function sketchSetup(p) {} function sketchDraw(p) { p.clear(); }"}\n'
        "```"
    )


@pytest.fixture
def palette_model_text():
    """Fenced Gemini answer for the palette variant"""
    return (
        "```json\n"
        '{"sounds":["heavy-rain.mp3"],"colors":["#112233","#445566","#778899"]}\n'
        "```"
    )


@pytest.fixture
def mock_image_response():
    """Successful image service response carrying three bytes"""
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    response.content = bytes([0x1, 0x2, 0x3])
    return response


@pytest.fixture
def mock_llm_client():
    """Stand-in for the process-wide Gemini client"""
    llm_client = MagicMock()
    llm_client.model_name = "test-model"
    return llm_client
