import base64
import logging
from urllib.parse import quote

import requests
from fastapi import HTTPException

from config import Config

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred while generating the soundscape."

# Characters encodeURIComponent leaves alone on top of quote()'s defaults
_URI_COMPONENT_SAFE = "!~*'()"


def build_image_url(prompt: str, *, base_url: str | None = None, style: str | None = None) -> str:
    base_url = (base_url or Config.IMAGE_SERVICE.BASE_URL).rstrip("/")
    style = Config.IMAGE_SERVICE.STYLE if style is None else style

    full_prompt = f"{prompt}, {style}"
    encoded_prompt = quote(full_prompt.replace(" ", "_"), safe=_URI_COMPONENT_SAFE)
    return f"{base_url}/p/{encoded_prompt}/?nologo=true"


def fetch_image_base64(prompt: str) -> str:
    """Fetch the background image for ``prompt`` and return it base64-encoded.

    Network errors from requests propagate untouched. A non-2xx status is
    turned into a 500 for the caller; the upstream status is only logged.
    """
    image_url = build_image_url(prompt)
    logger.info(f"Fetching image from: {image_url}")

    image_response = requests.get(image_url, timeout=Config.IMAGE_SERVICE.TIMEOUT)
    if not image_response.ok:
        logger.error(f"Image request failed with status: {image_response.status_code}")
        raise HTTPException(
            status_code=500,
            detail={
                "stage": "image",
                "message": GENERIC_ERROR_MESSAGE,
                "upstream_status": image_response.status_code,
            },
        )

    image_base64 = base64.b64encode(image_response.content).decode("ascii")
    logger.info(f"Fetched and encoded background image ({len(image_response.content)} bytes).")
    return image_base64
