"""
Engine adapter contract shared by every image provider.
"""
from abc import ABC, abstractmethod

from ..models import Engine, GenerationResult, RenderConfig

PERMISSION_MARKERS = ('PERMISSION_DENIED', '403', 'permission')


def looks_like_permission_error(message: str) -> bool:
    return any(marker in message for marker in PERMISSION_MARKERS)


class EngineAdapter(ABC):
    """
    One provider's request/response cycle behind a uniform call.

    Subclasses raise the classified errors from aura_studio.errors and
    never return partial results.
    """

    engine: Engine

    # Set when the adapter sends explicit pixel sizes instead of resolution hints
    requires_pixel_dimensions = False

    @property
    def requires_elevated_credential(self) -> bool:
        return False

    @abstractmethod
    def generate(self, image: str, prompt: str, config: RenderConfig) -> GenerationResult:
        """
        Args:
            image: Source image as a data URI or bare base64
            prompt: Finished instruction text
            config: Render settings for this request

        Returns:
            GenerationResult: Image as a data URI or URL
        """
