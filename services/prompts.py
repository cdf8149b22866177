"""Instruction templates sent to Gemini.

Both templates embed the same allow-list of sound files. The files live in the
frontend's ``static/audio`` folder, so the model must only pick names from it.
"""

AVAILABLE_SOUNDS = [
    "heavy-rain.mp3",
    "distant-thunder.mp3",
    "crackling-fireplace.mp3",
    "keyboard-typing.mp3",
    "forest.mp3",
    "wind.mp3",
    "office-ambience.mp3",
]

MIN_SOUNDS = 2
MAX_SOUNDS = 4
PALETTE_SIZE = 3

OVERLAY_EXAMPLE = (
    '{\n'
    '    "sounds": ["crackling-fireplace.mp3", "heavy-rain.mp3"],\n'
    '    "p5Code": "let snowflakes = []; function sketchSetup(p) { for (let i = 0; i < 200; i++) '
    '{ snowflakes.push({x: p.random(p.width), y: p.random(p.height), speed: p.random(1, 3), '
    'radius: p.random(1, 3)}); } } function sketchDraw(p) { p.clear(); p.noStroke(); '
    'p.fill(255, 255, 255, 150); for (let flake of snowflakes) { p.ellipse(flake.x, flake.y, '
    'flake.radius, flake.radius); flake.y += flake.speed; if (flake.y > p.height) { flake.y = 0; '
    'flake.x = p.random(p.width); } } }"\n'
    '}'
)

PALETTE_EXAMPLE = (
    '{\n'
    '    "sounds": ["crackling-fireplace.mp3", "heavy-rain.mp3"],\n'
    '    "colors": ["#2b2d42", "#8d99ae", "#edf2f4"]\n'
    '}'
)


def _sound_list() -> str:
    return ", ".join(AVAILABLE_SOUNDS)


def build_overlay_prompt(prompt: str) -> str:
    return f"""
You are a creative p5.js developer specializing in beautiful, performant, atmospheric overlays.
Interpret the user's prompt and respond with a JSON object holding a list of sounds and a string of p5.js code for a TRANSPARENT overlay.

**CRITICAL CONSTRAINTS:**
1.  Your entire response MUST be a single, valid JSON object. No explanatory text and no markdown formatting.
2.  The JSON object must have two keys: "sounds" (an array of {MIN_SOUNDS}-{MAX_SOUNDS} strings) and "p5Code" (a single string of JavaScript code).
3.  You MUST choose sounds ONLY from this list: {_sound_list()}
4.  The "p5Code" string MUST define two functions: `sketchSetup(p)` and `sketchDraw(p)`.
5.  `sketchDraw(p)` MUST start with `p.clear()` so the background stays transparent. Do NOT use `p.background()`.
6.  The code should ONLY draw foreground, atmospheric elements (e.g. rain, snow, dust motes, fireflies).
7.  You MUST NOT call `createCanvas(p)`.

**User's Prompt:** "{prompt}"

**Example for "a quiet library on a snowy day":**
{OVERLAY_EXAMPLE}
"""


def build_palette_prompt(prompt: str) -> str:
    return f"""
You are a sound and color designer creating calm ambient scenes.
Interpret the user's prompt and respond with a JSON object holding a list of sounds and a color palette that captures the mood.

**CRITICAL CONSTRAINTS:**
1.  Your entire response MUST be a single, valid JSON object. No explanatory text and no markdown formatting.
2.  The JSON object must have two keys: "sounds" (an array of {MIN_SOUNDS}-{MAX_SOUNDS} strings) and "colors" (an array of exactly {PALETTE_SIZE} strings).
3.  You MUST choose sounds ONLY from this list: {_sound_list()}
4.  Every entry in "colors" MUST be a hex color in the form "#RRGGBB".

**User's Prompt:** "{prompt}"

**Example for "a quiet library on a snowy day":**
{PALETTE_EXAMPLE}
"""
