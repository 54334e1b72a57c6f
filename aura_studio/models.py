"""
Data Models
Defines the enums and dataclasses shared by the prompt, engine and history layers
"""

import time
import uuid
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, Dict, Any


class EditIntent(str, Enum):
    """Which prompt branch runs for a request"""
    BACKGROUND_REPLACE = 'BACKGROUND'
    GENERAL_ENHANCE = 'GENERAL'
    CREATIVE_RESTYLE = 'CREATIVE'
    VIEW_SHIFT = 'VIEW_SHIFT'


class Language(str, Enum):
    EN = 'en'
    ZH = 'zh'


class Engine(str, Enum):
    """Image generation provider; also fixes the prompt language"""
    PRIMARY = 'GEMINI'
    SECONDARY = 'SEEDREAM'

    @property
    def language(self) -> Language:
        return Language.ZH if self is Engine.SECONDARY else Language.EN


class ViewShiftMode(str, Enum):
    """Whether the camera moves around the subject or the subject turns"""
    CAMERA = 'CAMERA'
    SUBJECT = 'SUBJECT'


class Direction(str, Enum):
    UP = 'UP'
    DOWN = 'DOWN'
    LEFT = 'LEFT'
    RIGHT = 'RIGHT'


RESOLUTIONS = ('1K', '2K', '4K')
ASPECT_RATIOS = ('1:1', '16:9', '9:16', '4:3', '3:4')


@dataclass
class RotationState:
    """Raw cube rotation in degrees, unbounded"""
    pitch: float = 0.0
    yaw: float = 0.0


@dataclass(frozen=True)
class ViewpointPreset:
    """Named viewpoint; `id` is stable, `label` is the English display string"""
    id: str
    label: str
    pitch: float
    yaw: float


@dataclass
class ViewpointInputs:
    """View-shift inputs: either a rotation or a preset id/label"""
    rotation: Optional[RotationState] = None
    preset: Optional[str] = None
    mode: ViewShiftMode = ViewShiftMode.CAMERA
    preserve_pose: bool = False


def _default_strength() -> float:
    # config imports this module, so resolve the setting at call time
    from .config import get_default_strength
    return get_default_strength()


@dataclass
class RenderConfig:
    """Per-request render settings"""
    resolution: str = '1K'
    aspect_ratio: str = '1:1'
    strength: float = field(default_factory=_default_strength)
    seed: int = -1
    scale: Optional[float] = 7.5
    negative_prompt: Optional[str] = None
    # Filled in by the orchestrator for adapters that need pixel sizes
    width: Optional[int] = None
    height: Optional[int] = None

    def __post_init__(self):
        if not 0.0 <= self.strength <= 1.0:
            raise ValueError(f"strength must be between 0 and 1, got {self.strength}")


@dataclass
class VolcengineConfig:
    """Persisted secondary provider credentials"""
    api_key: str = ''
    endpoint_id: str = ''

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'VolcengineConfig':
        data = data or {}
        return cls(api_key=data.get('apiKey', '') or '', endpoint_id=data.get('endpointId', '') or '')

    def to_dict(self) -> Dict[str, str]:
        return {'apiKey': self.api_key, 'endpointId': self.endpoint_id}

    @property
    def is_complete(self) -> bool:
        return bool(self.api_key and self.endpoint_id)


@dataclass
class GenerationResult:
    """A generated image as a data URI or a remote URL"""
    image_data: str

    @property
    def is_data_uri(self) -> bool:
        return self.image_data.startswith('data:')


@dataclass
class HistoryItem:
    """One successful generation, as persisted by the history store"""
    original_image: str
    generated_image: str
    prompt: str
    engine: Engine
    resolution: str
    aspect_ratio: str
    id: str = field(default_factory=lambda: f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}")
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the record keys the browser build stored"""
        return {
            'id': self.id,
            'timestamp': self.timestamp,
            'original': self.original_image,
            'generated': self.generated_image,
            'prompt': self.prompt,
            'engine': Engine(self.engine).value,
            'resolution': self.resolution,
            'aspectRatio': self.aspect_ratio,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HistoryItem':
        return cls(
            id=str(data['id']),
            timestamp=int(data.get('timestamp', 0)),
            original_image=data.get('original', ''),
            generated_image=data.get('generated', ''),
            prompt=data.get('prompt', ''),
            engine=Engine(data.get('engine', Engine.PRIMARY.value)),
            resolution=data.get('resolution', '1K'),
            aspect_ratio=data.get('aspectRatio', '1:1'),
        )


def render_config_summary(config: RenderConfig) -> Dict[str, Any]:
    """Loggable view of a render config (no image payloads)"""
    return {k: v for k, v in asdict(config).items() if v is not None}
