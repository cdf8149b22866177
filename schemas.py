from pydantic import BaseModel
from typing import Any, Dict, List, Optional

class GenerateRequest(BaseModel):
    # Left untyped so a non-string prompt reaches the handler and gets a 400
    prompt: Optional[Any] = None

class OverlayEnvelope(BaseModel):
    sounds: List[str]
    p5Code: str

class PaletteEnvelope(BaseModel):
    sounds: List[str]
    colors: List[str]

class EnvelopeParseResult(BaseModel):
    """Outcome of cleaning, parsing and validating the model's text output."""
    ok: bool
    data: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None

class OverlaySoundscape(BaseModel):
    imageBase64: str
    sounds: List[str]
    p5Code: str

class PaletteSoundscape(BaseModel):
    sounds: List[str]
    colors: List[str]

class ErrorResponse(BaseModel):
    error: str

class HealthResponse(BaseModel):
    status: str
    variant: str
    model: str
