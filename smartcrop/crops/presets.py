"""Aspect ratio presets."""
from __future__ import annotations

from fractions import Fraction
from typing import Union

from ..core.exceptions import InvalidAspectRatioError

# Width / height
ASPECT_RATIOS = {
    'square':         1 / 1,
    'landscape_4_3':  4 / 3,
    'landscape_16_9': 16 / 9,
    'portrait_3_4':   3 / 4,
    'portrait_9_16':  9 / 16,
    'golden_ratio':   1.618,
}


def get_preset_info(preset: str) -> dict:
    """Get detailed info about a preset.

    Args:
        preset: Preset name

    Returns:
        Dictionary with preset details

    Raises:
        ValueError: If preset is unknown
    """
    if preset not in ASPECT_RATIOS:
        raise ValueError(f"Unknown preset: {preset}. Available: {list(ASPECT_RATIOS.keys())}")

    ratio = ASPECT_RATIOS[preset]

    # Determine orientation
    if ratio == 1:
        orientation = 'square'
    elif ratio < 1:
        orientation = 'portrait'
    else:
        orientation = 'landscape'

    # Golden ratio has no small W:H form
    fraction = Fraction(ratio).limit_denominator(20)
    if abs(fraction - Fraction(ratio)) < 1e-9:
        label = f"{fraction.numerator}:{fraction.denominator}"
    else:
        label = f"{ratio:.3f}:1"

    return {
        'name': preset,
        'ratio': ratio,
        'aspect_ratio': label,
        'orientation': orientation,
    }


def get_all_presets() -> list[str]:
    """Get list of all preset names."""
    return list(ASPECT_RATIOS.keys())


def get_presets_by_orientation(orientation: str) -> list[str]:
    """Get presets filtered by orientation.

    Args:
        orientation: 'square', 'portrait', or 'landscape'

    Returns:
        List of preset names matching orientation
    """
    result = []
    for name in ASPECT_RATIOS:
        info = get_preset_info(name)
        if info['orientation'] == orientation:
            result.append(name)
    return result


def parse_aspect_ratio(value: Union[str, float, int]) -> float:
    """Turn a ratio given as a number, 'W:H', '1.5' or preset name into a float.

    Raises:
        InvalidAspectRatioError: If the value can't be read or isn't positive
    """
    if isinstance(value, (int, float)):
        ratio = float(value)
    else:
        text = str(value).strip().lower()
        if text in ASPECT_RATIOS:
            return ASPECT_RATIOS[text]
        try:
            if ':' in text:
                left, right = text.split(':', 1)
                ratio = float(left) / float(right)
            else:
                ratio = float(text)
        except (ValueError, ZeroDivisionError):
            raise InvalidAspectRatioError(f"Can't read aspect ratio: {value!r}")

    if not ratio > 0 or ratio == float('inf'):
        raise InvalidAspectRatioError(f"Aspect ratio must be positive, got {value!r}")
    return ratio
