# ================================================================
# Shared prompt fragments
# ================================================================

_PREAMBLE = "You are an expert at reading pinball machine scoreboards."

_SCORE_INSTRUCTIONS = """
SCORE:
The photo shows a pinball machine's display (DMD, LCD, or alphanumeric) or a high score screen.
- Read the largest score currently shown. If several players are listed, use the highest score.
- Scores are often grouped with commas or periods (e.g. 121,962,080). Return the digits only, as a number.
- Ignore credits, ball counters, and match numbers."""

_TABLE_INSTRUCTIONS = """
TABLE NAME:
Use the machine's title as printed on the backglass, the display, or the apron (e.g. "Medieval Madness", "Guardians of the Galaxy").
If the title is not visible in the photo, use null. Do not guess from the artwork alone."""

_JSON_INSTRUCTIONS = """
Return ONLY a JSON object with this exact structure, no other text:
{"score": <number>, "tableName": "<string or null>"}"""


# ================================================================
# Prompt builders
# ================================================================

def build_score_extraction_prompt() -> str:
    """Prompt sent alongside the scoreboard photo."""
    return "\n".join([
        _PREAMBLE,
        _SCORE_INSTRUCTIONS,
        _TABLE_INSTRUCTIONS,
        _JSON_INSTRUCTIONS,
    ])


SCORE_EXTRACTION_PROMPT = build_score_extraction_prompt()
