"""Fan-transformation prompt compilation.

The prompt combines the four FanConfig values with fixed directives that keep
the people recognisable and the result photographic.

Prompt Structure::

    Transform this image into a realistic photo of enthusiastic [Sport] fans ...

    Requirements:
    1. [Team colors] outfits
    2. [Intensity] energy
    3. Stadium background during a [Atmosphere]
    4-6. Fixed lighting, identity and style directives

Each configuration value is interpolated exactly once. The fixed directives
never repeat a catalog value (no "High quality", no second mention of the
sport), so the rendered text can be checked for every field.

Usage
-----
::

    prompt = build_prompt(FanConfig(sport="Basketball", team_colors="Purple and Gold"))
"""

from __future__ import annotations

from .models import FanConfig

# ---------------------------------------------------------------------------
# Fixed directives.
# Constants rather than configuration; users steer the result through the
# four FanConfig fields only.
# ---------------------------------------------------------------------------

_LIGHTING_DIRECTIVE = (
    "Ensure the lighting on the people matches the stadium environment "
    "(e.g., stadium floodlights or sunlight)."
)

_IDENTITY_DIRECTIVE = (
    "Maintain the identity, facial features, and pose of the original people as much as "
    "possible, but fully integrate them into the fan scene."
)

_STYLE_DIRECTIVE = "Photorealistic style with crisp, detailed rendering."


def build_prompt(config: FanConfig) -> str:
    """Render a FanConfig into the instruction sent with the photo.

    Args:
        config: Sport, team colors, intensity and atmosphere to interpolate

    Returns:
        The instruction block; identical input always yields identical output
    """
    requirements = [
        f"Replace the clothes of the people with {config.team_colors} sports jerseys, "
        "scarves, caps, and face paint appropriate for the sport.",
        "Make them look excited, cheering, or intense based on a "
        f"{config.intensity} intensity level.",
        "Replace the entire background with a realistic, crowded stadium scene for the same "
        f"sport during a {config.atmosphere}.",
        _LIGHTING_DIRECTIVE,
        _IDENTITY_DIRECTIVE,
        _STYLE_DIRECTIVE,
    ]

    lines = [
        f"Transform this image into a realistic photo of enthusiastic {config.sport} fans "
        "at a stadium.",
        "",
        "Requirements:",
    ]
    lines.extend(f"{number}. {text}" for number, text in enumerate(requirements, start=1))
    return "\n".join(lines)
