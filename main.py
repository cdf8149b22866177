from typing import Union
import logging

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Config, validate_config
from schemas import (
    ErrorResponse,
    GenerateRequest,
    HealthResponse,
    OverlaySoundscape,
    PaletteSoundscape,
)
from services.image_service import GENERIC_ERROR_MESSAGE
from services.llm_service import GeminiClient
from services.soundscape_service import SoundscapeVariant, generate_soundscape, get_variant

# --- VARS & CONFIG ---

logging.basicConfig(level=Config.LOGGING.LEVEL)
logger = logging.getLogger(__name__)

# Refuse to start without a usable Gemini key or with an unknown variant
validate_config()

INVALID_PROMPT_MESSAGE = "A valid prompt is required."

gemini_client = GeminiClient(Config.GEMINI.API_KEY, Config.GEMINI.MODEL_NAME)
active_variant = get_variant(Config.SOUNDSCAPE.VARIANT)
logger.info(f"Serving the '{active_variant.name}' soundscape variant with {gemini_client.model_name}.")


# Dependencies
def get_llm_client() -> GeminiClient:
    return gemini_client


def get_soundscape_variant() -> SoundscapeVariant:
    return active_variant


# --- FASTAPI SETUP ---
app = FastAPI(title="Soundscape Generator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- GLOBAL EXCEPTION HANDLERS ---
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    detail = exc.detail
    if not isinstance(detail, dict):
        detail = {"message": str(detail)}
    logger.error(f"HTTP Exception: {exc.status_code} - {detail}")
    return JSONResponse(status_code=exc.status_code, content={"error": detail.get("message", "")})

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected request body: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": INVALID_PROMPT_MESSAGE})

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})


# --- API ENDPOINTS ---

@app.get("/health", response_model=HealthResponse)
def health(
    llm_client: GeminiClient = Depends(get_llm_client),
    variant: SoundscapeVariant = Depends(get_soundscape_variant),
):
    return {"status": "healthy", "variant": variant.name, "model": llm_client.model_name}

@app.post(
    "/api/generate",
    response_model=Union[OverlaySoundscape, PaletteSoundscape],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def generate_endpoint(
    input: GenerateRequest,
    llm_client: GeminiClient = Depends(get_llm_client),
    variant: SoundscapeVariant = Depends(get_soundscape_variant),
):
    prompt = input.prompt
    if not isinstance(prompt, str) or not prompt.strip():
        raise HTTPException(status_code=400, detail={"stage": "input", "message": INVALID_PROMPT_MESSAGE})

    logger.info(f"Received prompt: {prompt!r}")
    try:
        return generate_soundscape(prompt, variant=variant, llm_client=llm_client)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Soundscape generation failed for prompt {prompt!r}: {e}")
        raise HTTPException(status_code=500, detail={"stage": "unexpected", "message": GENERIC_ERROR_MESSAGE}) from e


if __name__ == "__main__":
    uvicorn.run(app, host=Config.SERVER.HOST, port=Config.SERVER.PORT)
