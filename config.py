import os

from dotenv import load_dotenv

load_dotenv()

PLACEHOLDER_API_KEYS = {
    "your_gemini_api_key",
    "your_gemini_api_key_here",
    "your-api-key-here",
    "your_api_key_here",
    "YOUR_API_KEY",
    "changeme",
}


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    return float(value) if value else None


class Config:
    # === Text generation ===

    class GEMINI:
        API_KEY = os.getenv("GEMINI_API_KEY")
        MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-1.5-flash-latest")

    # === Image generation ===

    class IMAGE_SERVICE:
        BASE_URL = os.getenv("IMAGE_SERVICE_URL", "https://pollinations.ai")
        STYLE = os.getenv(
            "IMAGE_STYLE",
            "lofi anime style, beautiful, aesthetic, ghibli inspired, pov",
        )
        # None leaves the timeout to requests, which never times out
        TIMEOUT = _optional_float("IMAGE_SERVICE_TIMEOUT")

    # === Soundscape ===

    class SOUNDSCAPE:
        VARIANT = os.getenv("SOUNDSCAPE_VARIANT", "overlay").strip().lower()

    # === Server ===

    class SERVER:
        HOST = os.getenv("HOST", "0.0.0.0")
        PORT = int(os.getenv("PORT", "8000"))

    class CORS:
        ALLOW_ORIGINS = [
            origin.strip()
            for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
            if origin.strip()
        ]

    class LOGGING:
        LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def ensure_api_key(api_key: str | None) -> str:
    """Return the key, or raise if it is missing or still a placeholder."""
    if not api_key or not api_key.strip():
        raise RuntimeError(
            "GEMINI_API_KEY is not defined. Create a .env file and add your key."
        )
    if api_key.strip() in PLACEHOLDER_API_KEYS:
        raise RuntimeError(
            "GEMINI_API_KEY still holds a placeholder value. Replace it with a real key."
        )
    return api_key.strip()


def validate_config() -> None:
    ensure_api_key(Config.GEMINI.API_KEY)

    # services import Config, so this import cannot live at module level
    from services.soundscape_service import get_variant

    try:
        get_variant(Config.SOUNDSCAPE.VARIANT)
    except ValueError as exc:
        raise RuntimeError(str(exc)) from exc
