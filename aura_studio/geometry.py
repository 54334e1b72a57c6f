"""
Camera angle normalization and verbal classification.
"""
import math
from typing import Tuple, Union

from .models import Language

# Thresholds in degrees; uneven on purpose to match how people describe camera angles
VERTICAL_THRESHOLD = 20
PROFILE_MIN = 20
PROFILE_MAX = 160

VERTICAL_LABELS = {
    Language.EN: {'low': "Worm's eye view", 'eye': 'Eye level', 'high': 'High angle view'},
    Language.ZH: {'low': '仰视', 'eye': '平视', 'high': '俯视'},
}

HORIZONTAL_LABELS = {
    Language.EN: {'front': 'Front view', 'right': 'Right profile', 'left': 'Left profile', 'back': 'Back view'},
    Language.ZH: {'front': '正面', 'right': '右侧', 'left': '左侧', 'back': '背面'},
}


def round_half_up(value: float) -> int:
    """Round .5 towards +inf (Python's round() would round half to even)."""
    return int(math.floor(value + 0.5))


def normalize_degrees(raw: float) -> float:
    """Wrap a degree value into (-180, 180]."""
    norm = ((raw % 360) + 540) % 360 - 180
    # The modular form lands on -180 for odd multiples of 180
    return norm + 360 if norm == -180 else norm


def normalize_angle(pitch: float, yaw: float) -> Tuple[float, float]:
    return normalize_degrees(pitch), normalize_degrees(yaw)


def classify_angle(pitch: float, yaw: float) -> Tuple[str, str]:
    """
    Bucket an orientation into (vertical, horizontal) keys.

    vertical is one of 'low', 'eye', 'high'; horizontal one of
    'front', 'right', 'left', 'back'. Both comparisons are strict,
    so 20 degrees of yaw is still a front view.
    """
    norm_pitch, norm_yaw = normalize_angle(pitch, yaw)

    vertical = 'eye'
    if norm_pitch < -VERTICAL_THRESHOLD:
        vertical = 'low'
    elif norm_pitch > VERTICAL_THRESHOLD:
        vertical = 'high'

    horizontal = 'front'
    if PROFILE_MIN < norm_yaw < PROFILE_MAX:
        horizontal = 'right'
    elif -PROFILE_MAX < norm_yaw < -PROFILE_MIN:
        horizontal = 'left'
    elif abs(norm_yaw) >= PROFILE_MAX:
        horizontal = 'back'

    return vertical, horizontal


def describe_angle(pitch: float, yaw: float, language: Union[Language, str] = Language.EN) -> str:
    """
    Describe an orientation in words, e.g. "Eye level, Right profile (X:0°, Y:90°)".

    Args:
        pitch: Vertical angle in degrees (normalized here if it is not already)
        yaw: Horizontal angle in degrees
        language: Output vocabulary, English or Chinese

    Returns:
        str: Descriptor pair followed by the rounded normalized degrees
    """
    language = Language(language)
    norm_pitch, norm_yaw = normalize_angle(pitch, yaw)
    vertical, horizontal = classify_angle(norm_pitch, norm_yaw)

    v_desc = VERTICAL_LABELS[language][vertical]
    h_desc = HORIZONTAL_LABELS[language][horizontal]
    return f"{v_desc}, {h_desc} (X:{round_half_up(norm_pitch)}°, Y:{round_half_up(norm_yaw)}°)"
