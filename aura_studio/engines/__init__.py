"""
Engine adapters and the default engine-to-adapter registry
"""

from typing import Dict, Optional

from ..config import CredentialResolver
from ..models import Engine
from .base import EngineAdapter
from .gemini import GeminiAdapter
from .volcengine import VolcengineAdapter


def default_adapters(credentials: Optional[CredentialResolver] = None) -> Dict[Engine, EngineAdapter]:
    credentials = credentials or CredentialResolver()
    return {
        Engine.PRIMARY: GeminiAdapter(credentials.gemini_api_key),
        Engine.SECONDARY: VolcengineAdapter(credentials.volcengine_config),
    }


__all__ = ['EngineAdapter', 'GeminiAdapter', 'VolcengineAdapter', 'default_adapters']
