"""
Aura Studio
Image editing and viewpoint-change requests for Gemini and Volcengine Seedream
"""

from .errors import (
    AuraError, ConfigurationError, ValidationError, ProviderError,
    AuthorizationError, ProviderResponseError, NoImageReturnedError,
)
from .models import (
    EditIntent, Engine, Language, Direction, ViewShiftMode, RotationState,
    ViewpointPreset, ViewpointInputs, RenderConfig, GenerationResult, HistoryItem,
)
from .orchestrator import GenerationOrchestrator, GenerationSession

__all__ = [
    'AuraError', 'ConfigurationError', 'ValidationError', 'ProviderError',
    'AuthorizationError', 'ProviderResponseError', 'NoImageReturnedError',
    'EditIntent', 'Engine', 'Language', 'Direction', 'ViewShiftMode', 'RotationState',
    'ViewpointPreset', 'ViewpointInputs', 'RenderConfig', 'GenerationResult', 'HistoryItem',
    'GenerationOrchestrator', 'GenerationSession',
]
