"""
Prompt templates and the composer that turns user text plus an edit intent into the final instruction.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from .geometry import describe_angle
from .models import EditIntent, Language, RotationState, ViewpointInputs, ViewShiftMode
from .presets import display_label

# (lead, user text slot, tail); the slot is dropped when the user text is empty
EDIT_TEMPLATES = {
    Language.EN: {
        EditIntent.BACKGROUND_REPLACE: (
            "Product photography background replacement.",
            "Place the product in: {text}.",
            "CRITICAL: Do not alter the product's shape, logo, or color. "
            "Only change the background environment. Realistic lighting, {resolution}.",
        ),
        EditIntent.GENERAL_ENHANCE: (
            "Professional image editing.",
            "{text}.",
            "Maintain the original subject's identity strictly. High fidelity, {resolution}.",
        ),
        EditIntent.CREATIVE_RESTYLE: (
            "Creative re-imagining.",
            "{text}.",
            "Artistic style, masterpiece quality, {resolution}.",
        ),
    },
    Language.ZH: {
        EditIntent.BACKGROUND_REPLACE: (
            "产品摄影背景替换。",
            "将产品置于：{text}。",
            "关键：不得改变产品的形状、标志或颜色，仅替换背景环境。真实光影，{resolution}。",
        ),
        EditIntent.GENERAL_ENHANCE: (
            "专业图像精修。",
            "{text}。",
            "严格保持原始主体的身份特征。高保真，{resolution}。",
        ),
        EditIntent.CREATIVE_RESTYLE: (
            "创意重塑。",
            "{text}。",
            "艺术风格，大师级画质，{resolution}。",
        ),
    },
}

ROTATION_PREFIXES = {
    Language.EN: {ViewShiftMode.CAMERA: 'Camera Path: ', ViewShiftMode.SUBJECT: 'Object Pose: '},
    Language.ZH: {ViewShiftMode.CAMERA: '视角运镜: ', ViewShiftMode.SUBJECT: '物体朝向: '},
}

PRESET_PREFIXES = {
    Language.EN: {ViewShiftMode.CAMERA: 'Change the camera viewpoint to ', ViewShiftMode.SUBJECT: 'Turn the subject to show its '},
    Language.ZH: {ViewShiftMode.CAMERA: '将视角改为', ViewShiftMode.SUBJECT: '将主体转向为'},
}

PRESERVE_POSE_CLAUSES = {
    Language.EN: "Keep the subject's pose and action exactly unchanged.",
    Language.ZH: "保持主体的姿态和动作完全不变。",
}

NOVEL_VIEW_GUARDS = {
    Language.EN: "Novel View Synthesis logic: ensure subject identity features are consistent "
                 "and background perspective changes accordingly.",
    Language.ZH: "关键：要求画面透视合理，保持主体特征一致，背景光影融合自然。",
}

SEPARATORS = {Language.EN: '. ', Language.ZH: '。'}
JOINERS = {Language.EN: ' ', Language.ZH: ''}


@dataclass(frozen=True)
class TemplateSet:
    """A named family of prompt templates"""
    name: str
    edit_templates: Dict[Language, Dict[EditIntent, Tuple[str, str, str]]] = field(default_factory=lambda: EDIT_TEMPLATES)
    view_shift_guard: Optional[Dict[Language, str]] = None


DEFAULT_TEMPLATES = TemplateSet(name='default')
NOVEL_VIEW_TEMPLATES = TemplateSet(name='novel_view', view_shift_guard=NOVEL_VIEW_GUARDS)

TEMPLATE_SETS = {t.name: t for t in (DEFAULT_TEMPLATES, NOVEL_VIEW_TEMPLATES)}


def get_template_set(name: Optional[str]) -> TemplateSet:
    if not name:
        return DEFAULT_TEMPLATES
    if name not in TEMPLATE_SETS:
        raise ValueError(f"Unknown prompt template set: {name}")
    return TEMPLATE_SETS[name]


def _clean(text: Optional[str]) -> str:
    """Trim whitespace and any trailing sentence punctuation the template adds back"""
    return (text or '').strip().rstrip('.。')


def viewpoint_phrase(viewpoint: ViewpointInputs, language: Union[Language, str]) -> str:
    """
    Target-view phrase for a view-shift request.

    A rotation goes through angle description, prefixed by camera path or
    object pose; a preset label is used as the target view.
    """
    language = Language(language)
    mode = ViewShiftMode(viewpoint.mode)
    if viewpoint.rotation is not None:
        rotation: RotationState = viewpoint.rotation
        return ROTATION_PREFIXES[language][mode] + describe_angle(rotation.pitch, rotation.yaw, language)
    if viewpoint.preset:
        return PRESET_PREFIXES[language][mode] + display_label(viewpoint.preset, language)
    raise ValueError("View shift requires either a rotation or a preset")


def compose(intent: Union[EditIntent, str], user_text: Optional[str], language: Union[Language, str],
            viewpoint: Optional[ViewpointInputs] = None, resolution: str = '1K',
            templates: TemplateSet = DEFAULT_TEMPLATES) -> str:
    """
    Build the final provider instruction.

    Args:
        intent: Edit intent selecting the template branch
        user_text: Free text from the user, may be empty
        language: Template language, fixed by the selected engine
        viewpoint: Rotation or preset inputs, required for VIEW_SHIFT
        resolution: Resolution tier quoted by the edit templates
        templates: Template family to use

    Returns:
        str: Finished prompt
    """
    intent = EditIntent(intent)
    language = Language(language)
    text = _clean(user_text)

    if intent is EditIntent.VIEW_SHIFT:
        if viewpoint is None:
            raise ValueError("View shift requires viewpoint inputs")
        parts = [text, viewpoint_phrase(viewpoint, language)]
        if viewpoint.preserve_pose:
            parts.append(_clean(PRESERVE_POSE_CLAUSES[language]))
        if templates.view_shift_guard:
            parts.append(_clean(templates.view_shift_guard[language]))
        prompt = SEPARATORS[language].join(p for p in parts if p)
        # Trailing clauses lose their full stop in _clean; put it back
        if len(parts) > 2:
            prompt += SEPARATORS[language].rstrip()
        return prompt

    lead, slot, tail = templates.edit_templates[language][intent]
    pieces = [lead]
    if text:
        pieces.append(slot.format(text=text))
    pieces.append(tail.format(resolution=resolution))
    return JOINERS[language].join(pieces)
