from unittest.mock import MagicMock, PropertyMock, patch

import pytest

from services.llm_service import GeminiClient, _extract_gemini_text


@pytest.mark.unit
@patch("services.llm_service.genai")
def test_gemini_client_configures_once_and_generates(mock_genai):
    mock_model = MagicMock()
    mock_model.generate_content.return_value = MagicMock(text='{"sounds": []}')
    mock_genai.GenerativeModel.return_value = mock_model

    client = GeminiClient("test-key", "gemini-test")

    mock_genai.configure.assert_called_once_with(api_key="test-key")
    mock_genai.GenerativeModel.assert_called_once_with("gemini-test")
    assert client.generate("make a soundscape") == '{"sounds": []}'
    mock_model.generate_content.assert_called_once_with("make a soundscape")


@pytest.mark.unit
@patch("services.llm_service.genai")
def test_gemini_client_propagates_api_errors(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("quota")

    client = GeminiClient("test-key", "gemini-test")
    with pytest.raises(RuntimeError, match="quota"):
        client.generate("anything")


@pytest.mark.unit
def test_extract_text_falls_back_to_candidates():
    part = MagicMock()
    part.text = "from candidates"
    llm_response = MagicMock()
    type(llm_response).text = PropertyMock(side_effect=ValueError("no text"))
    llm_response.candidates = [MagicMock()]
    llm_response.candidates[0].content.parts = [part]

    assert _extract_gemini_text(llm_response) == "from candidates"


@pytest.mark.unit
def test_extract_text_returns_empty_string_without_text():
    llm_response = MagicMock()
    llm_response.text = None
    llm_response.candidates = []

    assert _extract_gemini_text(llm_response) == ""
