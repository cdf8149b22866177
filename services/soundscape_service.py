import json
import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Type, Union

from fastapi import HTTPException
from pydantic import BaseModel, ValidationError

from schemas import (
    EnvelopeParseResult,
    OverlayEnvelope,
    OverlaySoundscape,
    PaletteEnvelope,
    PaletteSoundscape,
)
from services.image_service import fetch_image_base64
from services.llm_service import GeminiClient
from services.prompts import (
    AVAILABLE_SOUNDS,
    MAX_SOUNDS,
    MIN_SOUNDS,
    PALETTE_SIZE,
    build_overlay_prompt,
    build_palette_prompt,
)

logger = logging.getLogger(__name__)

INVALID_AI_RESPONSE_MESSAGE = "The AI returned an invalid response. Please try a different prompt."

HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class SoundscapeVariant:
    """One output shape of the generator: its instruction and its schema."""

    name: str
    build_prompt: Callable[[str], str]
    envelope_model: Type[BaseModel]
    includes_image: bool


OVERLAY_VARIANT = SoundscapeVariant(
    name="overlay",
    build_prompt=build_overlay_prompt,
    envelope_model=OverlayEnvelope,
    includes_image=True,
)

PALETTE_VARIANT = SoundscapeVariant(
    name="palette",
    build_prompt=build_palette_prompt,
    envelope_model=PaletteEnvelope,
    includes_image=False,
)

VARIANTS: Dict[str, SoundscapeVariant] = {
    OVERLAY_VARIANT.name: OVERLAY_VARIANT,
    PALETTE_VARIANT.name: PALETTE_VARIANT,
}


def get_variant(name: str) -> SoundscapeVariant:
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown soundscape variant {name!r}; expected one of: {', '.join(VARIANTS)}"
        ) from None


def clean_model_output(text: str) -> str:
    return text.replace("```json", "").replace("```", "").strip()


def parse_envelope(text: str, variant: SoundscapeVariant) -> EnvelopeParseResult:
    cleaned_text = clean_model_output(text)
    try:
        raw_data = json.loads(cleaned_text)
    except json.JSONDecodeError as exc:
        return EnvelopeParseResult(ok=False, reason=f"Response is not valid JSON: {exc}")

    if not isinstance(raw_data, dict):
        return EnvelopeParseResult(
            ok=False, reason=f"Expected a JSON object, got {type(raw_data).__name__}"
        )

    try:
        envelope = variant.envelope_model.model_validate(raw_data)
    except ValidationError as exc:
        return EnvelopeParseResult(
            ok=False,
            reason=f"Response does not match the {variant.name} schema: {exc.error_count()} error(s)",
        )

    return EnvelopeParseResult(ok=True, data=envelope.model_dump())


def find_constraint_warnings(data: dict, variant: SoundscapeVariant) -> List[str]:
    """List the instruction constraints the model ignored.

    These are reported, not enforced: a response that breaks them is still
    returned to the caller.
    """
    warnings = []
    sounds = data.get("sounds", [])

    unknown_sounds = [sound for sound in sounds if sound not in AVAILABLE_SOUNDS]
    if unknown_sounds:
        warnings.append(f"sounds outside the allow-list: {unknown_sounds}")
    if not MIN_SOUNDS <= len(sounds) <= MAX_SOUNDS:
        warnings.append(f"expected {MIN_SOUNDS}-{MAX_SOUNDS} sounds, got {len(sounds)}")

    if "colors" in data:
        colors = data["colors"]
        if len(colors) != PALETTE_SIZE:
            warnings.append(f"expected {PALETTE_SIZE} colors, got {len(colors)}")
        bad_colors = [color for color in colors if not HEX_COLOR_PATTERN.match(color)]
        if bad_colors:
            warnings.append(f"colors that are not #RRGGBB hex: {bad_colors}")

    if "p5Code" in data:
        code = data["p5Code"]
        for entry_point in ("sketchSetup", "sketchDraw"):
            if entry_point not in code:
                warnings.append(f"p5Code does not define {entry_point}")
        if "p.clear()" not in code:
            warnings.append("p5Code never calls p.clear()")
        if "p.background(" in code:
            warnings.append("p5Code paints an opaque background")

    return warnings


def generate_soundscape(
    prompt: str, *, variant: SoundscapeVariant, llm_client: GeminiClient
) -> Union[OverlaySoundscape, PaletteSoundscape]:
    image_base64 = None
    if variant.includes_image:
        image_base64 = fetch_image_base64(prompt)

    logger.info(f"Generating {variant.name} soundscape with Gemini...")
    raw_text = llm_client.generate(variant.build_prompt(prompt))
    logger.debug(f"Raw Gemini response: {raw_text!r}")

    result = parse_envelope(raw_text, variant)
    if not result.ok:
        logger.error(f"Could not parse Gemini response for prompt {prompt!r}: {result.reason}")
        raise HTTPException(
            status_code=500,
            detail={"stage": "parse", "message": INVALID_AI_RESPONSE_MESSAGE},
        )
    logger.info(f"Parsed Gemini response: {result.data}")

    for warning in find_constraint_warnings(result.data, variant):
        logger.warning(f"Gemini ignored an instruction for prompt {prompt!r}: {warning}")

    if variant.includes_image:
        return OverlaySoundscape(imageBase64=image_base64, **result.data)
    return PaletteSoundscape(**result.data)
