"""
Viewpoint preset catalog, directional navigation between presets and cube face highlighting.
"""
from typing import Dict, FrozenSet, List, Optional, Union

from .models import Direction, Language, ViewpointPreset

# Ordered catalog; ids are stable, labels are English display strings
PRESETS: List[ViewpointPreset] = [
    ViewpointPreset('front', 'front view', 0, 0),
    ViewpointPreset('left', 'left side view', 0, -90),
    ViewpointPreset('right', 'right side view', 0, 90),
    ViewpointPreset('back', 'back view', 0, 180),
    ViewpointPreset('front_left', 'left three-quarter view', 0, -45),
    ViewpointPreset('front_right', 'right three-quarter view', 0, 45),
    ViewpointPreset('back_left', 'rear left three-quarter view', 0, -135),
    ViewpointPreset('back_right', 'rear right three-quarter view', 0, 135),
    ViewpointPreset('top', 'top-down view', 90, 0),
    ViewpointPreset('bottom', 'bottom-up view', -90, 0),
    ViewpointPreset('upper_left', 'upper-left three-quarter view', 45, -90),
    ViewpointPreset('upper_right', 'upper-right three-quarter view', 45, 90),
    ViewpointPreset('lower_left', 'lower-left three-quarter view', -45, -90),
    ViewpointPreset('lower_right', 'lower-right three-quarter view', -45, 90),
]

PRESET_LABELS = {
    Language.EN: {preset.id: preset.label for preset in PRESETS},
    Language.ZH: {
        'front': '正面视图',
        'left': '左侧视图',
        'right': '右侧视图',
        'back': '背面视图',
        'front_left': '左前45度视图',
        'front_right': '右前45度视图',
        'back_left': '左后45度视图',
        'back_right': '右后45度视图',
        'top': '顶视图',
        'bottom': '底视图',
        'upper_left': '左上俯视45度视图',
        'upper_right': '右上俯视45度视图',
        'lower_left': '左下仰视45度视图',
        'lower_right': '右下仰视45度视图',
    },
}

# Hand-curated; diagonals step back towards their cardinal neighbours rather than wrapping like a grid
ADJACENCY: Dict[str, Dict[Direction, str]] = {
    'front': {Direction.UP: 'top', Direction.DOWN: 'bottom', Direction.LEFT: 'front_left', Direction.RIGHT: 'front_right'},
    'front_left': {Direction.UP: 'upper_left', Direction.DOWN: 'lower_left', Direction.LEFT: 'left', Direction.RIGHT: 'front'},
    'front_right': {Direction.UP: 'upper_right', Direction.DOWN: 'lower_right', Direction.LEFT: 'front', Direction.RIGHT: 'right'},
    'left': {Direction.UP: 'upper_left', Direction.DOWN: 'lower_left', Direction.LEFT: 'back_left', Direction.RIGHT: 'front_left'},
    'right': {Direction.UP: 'upper_right', Direction.DOWN: 'lower_right', Direction.LEFT: 'front_right', Direction.RIGHT: 'back_right'},
    'back_left': {Direction.UP: 'top', Direction.DOWN: 'bottom', Direction.LEFT: 'back', Direction.RIGHT: 'left'},
    'back_right': {Direction.UP: 'top', Direction.DOWN: 'bottom', Direction.LEFT: 'right', Direction.RIGHT: 'back'},
    'back': {Direction.UP: 'top', Direction.DOWN: 'bottom', Direction.LEFT: 'back_right', Direction.RIGHT: 'back_left'},
    'top': {Direction.UP: 'top', Direction.DOWN: 'front', Direction.LEFT: 'upper_left', Direction.RIGHT: 'upper_right'},
    'bottom': {Direction.UP: 'front', Direction.DOWN: 'bottom', Direction.LEFT: 'lower_left', Direction.RIGHT: 'lower_right'},
    'upper_left': {Direction.UP: 'top', Direction.DOWN: 'left', Direction.LEFT: 'upper_left', Direction.RIGHT: 'top'},
    'upper_right': {Direction.UP: 'top', Direction.DOWN: 'right', Direction.LEFT: 'top', Direction.RIGHT: 'upper_right'},
    'lower_left': {Direction.UP: 'left', Direction.DOWN: 'bottom', Direction.LEFT: 'lower_left', Direction.RIGHT: 'bottom'},
    'lower_right': {Direction.UP: 'right', Direction.DOWN: 'bottom', Direction.LEFT: 'bottom', Direction.RIGHT: 'lower_right'},
}

ACTIVE_FACES: Dict[str, FrozenSet[str]] = {
    'front': frozenset({'front'}),
    'left': frozenset({'left'}),
    'right': frozenset({'right'}),
    'back': frozenset({'back'}),
    'front_left': frozenset({'front', 'left'}),
    'front_right': frozenset({'front', 'right'}),
    'back_left': frozenset({'back', 'left'}),
    'back_right': frozenset({'back', 'right'}),
    'top': frozenset({'top'}),
    'bottom': frozenset({'bottom'}),
    'upper_left': frozenset({'top', 'left'}),
    'upper_right': frozenset({'top', 'right'}),
    'lower_left': frozenset({'bottom', 'left'}),
    'lower_right': frozenset({'bottom', 'right'}),
}

_BY_ID = {preset.id: preset for preset in PRESETS}


def list_presets() -> List[ViewpointPreset]:
    return list(PRESETS)


def resolve_preset_id(key: str) -> Optional[str]:
    """Accept a preset id or any of its display labels"""
    if key in _BY_ID:
        return key
    for labels in PRESET_LABELS.values():
        for preset_id, label in labels.items():
            if label == key:
                return preset_id
    return None


def get_preset(key: str) -> Optional[ViewpointPreset]:
    preset_id = resolve_preset_id(key)
    return _BY_ID.get(preset_id) if preset_id else None


def display_label(key: str, language: Union[Language, str] = Language.EN) -> str:
    """Localized label for a preset; unknown keys are returned unchanged"""
    preset_id = resolve_preset_id(key)
    if preset_id is None:
        return key
    return PRESET_LABELS[Language(language)][preset_id]


def _label_language(key: str) -> Optional[Language]:
    for language, labels in PRESET_LABELS.items():
        if key in labels.values():
            return language
    return None


def navigate(current: str, direction: Union[Direction, str]) -> str:
    """
    Step from one preset to its neighbour.

    The result is the same kind of key as the input: an id for an id, or
    a label in the same language for a display label. Unknown presets or
    directions leave the selection where it is.
    """
    try:
        direction = Direction(direction)
    except ValueError:
        return current
    preset_id = resolve_preset_id(current)
    if preset_id is None:
        return current
    neighbour = ADJACENCY[preset_id].get(direction, preset_id)
    if current in _BY_ID:
        return neighbour
    return PRESET_LABELS[_label_language(current)][neighbour]


def active_faces(key: str) -> FrozenSet[str]:
    preset_id = resolve_preset_id(key)
    return ACTIVE_FACES.get(preset_id, frozenset()) if preset_id else frozenset()
