
import logging
import google.generativeai as genai

logger = logging.getLogger(__name__)


class GeminiClient:
    """Process-wide Gemini handle, built once at startup and shared by requests."""

    def __init__(self, api_key: str, model_name: str):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self._model = genai.GenerativeModel(model_name)

    def generate(self, text: str) -> str:
        logger.info(f"Getting response from Gemini ({self.model_name})...")
        llm_response = self._model.generate_content(text)
        output_text = _extract_gemini_text(llm_response)
        logger.info(f"Gemini says: {output_text}")
        return output_text


def _extract_gemini_text(llm_response) -> str:
    # .text raises ValueError when the candidate carries no text part
    try:
        output_text = llm_response.text
    except (AttributeError, ValueError):
        output_text = None
    if not output_text and getattr(llm_response, "candidates", None):
        parts = llm_response.candidates[0].content.parts
        if parts and hasattr(parts[0], "text"):
            output_text = parts[0].text
            logger.debug("Found text in Gemini candidates.")
    return output_text or ""
