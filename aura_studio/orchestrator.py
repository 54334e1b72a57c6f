"""
Generation Orchestrator
Single entry point for UI handlers: compose prompt, size the output, dispatch to an engine
"""

import dataclasses
import logging
import threading
from typing import Dict, Optional, Tuple, Union

from .config import CredentialResolver, get_default_strength
from .dimensions import resolve_dimensions
from .engines import EngineAdapter, default_adapters
from .errors import ConfigurationError, GenerationInProgressError, ValidationError
from .history import HistoryStore
from .models import (
    EditIntent, Engine, GenerationResult, HistoryItem, RenderConfig, ViewpointInputs, render_config_summary,
)
from .prompts import DEFAULT_TEMPLATES, TemplateSet, compose

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    """
    Turns one edit request into one provider call.

    Adapters are looked up by engine, so adding a provider only means
    registering another adapter. Failures propagate unchanged; nothing
    is retried.
    """

    def __init__(self, adapters: Optional[Dict[Engine, EngineAdapter]] = None,
                 templates: TemplateSet = DEFAULT_TEMPLATES,
                 credentials: Optional[CredentialResolver] = None):
        self.adapters = adapters if adapters is not None else default_adapters(credentials)
        self.templates = templates

    def register_adapter(self, engine: Engine, adapter: EngineAdapter) -> None:
        self.adapters[engine] = adapter

    def get_adapter(self, engine: Union[Engine, str]) -> EngineAdapter:
        adapter = self.adapters.get(Engine(engine))
        if adapter is None:
            raise ConfigurationError(f"No adapter registered for engine {Engine(engine).value}")
        return adapter

    def requires_elevated_credential(self, engine: Union[Engine, str]) -> bool:
        """Lets the UI ask for a billed credential before dispatching"""
        return self.get_adapter(engine).requires_elevated_credential

    def build_prompt(self, user_text: Optional[str], intent: Union[EditIntent, str], engine: Union[Engine, str],
                     render_config: RenderConfig, viewpoint: Optional[ViewpointInputs] = None) -> str:
        intent = EditIntent(intent)
        if intent is not EditIntent.VIEW_SHIFT and not (user_text or '').strip():
            raise ValidationError("Prompt is required")
        if intent is EditIntent.VIEW_SHIFT and viewpoint is None:
            raise ValidationError("View shift requires a rotation or a preset")
        return compose(intent, user_text, Engine(engine).language, viewpoint=viewpoint,
                       resolution=render_config.resolution, templates=self.templates)

    def prepare(self, image: Optional[str], user_text: Optional[str], intent: Union[EditIntent, str],
                engine: Union[Engine, str], render_config: Optional[RenderConfig] = None,
                viewpoint: Optional[ViewpointInputs] = None) -> Tuple[str, RenderConfig]:
        """Validate a request and compose its prompt; returns (prompt, render_config)"""
        if not image:
            raise ValidationError("An image is required")

        intent = EditIntent(intent)
        if render_config is None:
            render_config = RenderConfig(strength=get_default_strength(intent))
        prompt = self.build_prompt(user_text, intent, engine, render_config, viewpoint)
        return prompt, render_config

    def dispatch(self, image: str, prompt: str, engine: Union[Engine, str],
                 render_config: RenderConfig) -> GenerationResult:
        """Send an already composed prompt to the engine's adapter"""
        engine = Engine(engine)
        adapter = self.get_adapter(engine)

        if adapter.requires_pixel_dimensions:
            width, height = resolve_dimensions(render_config.aspect_ratio, render_config.resolution)
            render_config = dataclasses.replace(render_config, width=width, height=height)

        logger.info(f"🎨 Dispatching to {engine.value}: {render_config_summary(render_config)}")
        result = adapter.generate(image, prompt, render_config)
        logger.info(f"✅ {engine.value} generation complete")
        return GenerationResult(image_data=result.image_data)

    def run_generation(self, image: Optional[str], user_text: Optional[str], intent: Union[EditIntent, str],
                       engine: Union[Engine, str], render_config: Optional[RenderConfig] = None,
                       viewpoint: Optional[ViewpointInputs] = None) -> GenerationResult:
        """
        Run one generation request end to end

        Args:
            image: Source image (data URI or bare base64)
            user_text: Free text from the prompt box
            intent: Edit intent
            engine: Target provider, which also fixes prompt language
            render_config: Resolution, aspect ratio and provider tuning; defaults per intent
            viewpoint: Rotation or preset for VIEW_SHIFT

        Returns:
            GenerationResult: The generated image
        """
        prompt, render_config = self.prepare(image, user_text, intent, engine, render_config, viewpoint)
        return self.dispatch(image, prompt, engine, render_config)


class GenerationSession:
    """
    UI-side state for one editing surface.

    Holds the current original/generated pair, allows one request in
    flight at a time, and drops a result whose source image was cleared
    or replaced while the request was running.
    """

    def __init__(self, orchestrator: Optional[GenerationOrchestrator] = None,
                 history: Optional[HistoryStore] = None):
        self.orchestrator = orchestrator or GenerationOrchestrator()
        self.history = history if history is not None else HistoryStore()
        self.original: Optional[str] = None
        self.generated: Optional[str] = None
        self.last_prompt: Optional[str] = None
        # Settings of the shown result, so the UI can put its selectors back
        self.engine: Optional[Engine] = None
        self.resolution: Optional[str] = None
        self.aspect_ratio: Optional[str] = None
        self._lock = threading.Lock()
        self._pending = False

    @property
    def is_pending(self) -> bool:
        return self._pending

    def load_image(self, image: str) -> None:
        self.original = image
        self.generated = None

    def clear_image(self) -> None:
        self.original = None
        self.generated = None

    def generate(self, user_text: Optional[str], intent: Union[EditIntent, str], engine: Union[Engine, str],
                 render_config: Optional[RenderConfig] = None,
                 viewpoint: Optional[ViewpointInputs] = None) -> Optional[GenerationResult]:
        """
        Run a generation for the current image.

        Returns:
            GenerationResult, or None when the image changed before the result arrived
        """
        with self._lock:
            if self._pending:
                raise GenerationInProgressError()
            self._pending = True

        source = self.original
        try:
            engine = Engine(engine)
            prompt, render_config = self.orchestrator.prepare(source, user_text, intent, engine,
                                                              render_config, viewpoint)
            result = self.orchestrator.dispatch(source, prompt, engine, render_config)
        finally:
            self._pending = False

        if self.original is not source:
            logger.warning("⚠️ Source image changed while generating, discarding result")
            return None

        self.generated = result.image_data
        self.last_prompt = prompt
        self.engine = engine
        self.resolution = render_config.resolution
        self.aspect_ratio = render_config.aspect_ratio
        self.history.record(source, result.image_data, prompt, engine,
                            render_config.resolution, render_config.aspect_ratio)
        return result

    def restore(self, item: HistoryItem) -> HistoryItem:
        """
        Bring a history entry back into the editing surface.

        Restores the image pair, prompt, engine, resolution and aspect
        ratio. The item is returned for callers that sync other widgets.
        """
        self.original = item.original_image
        self.generated = item.generated_image
        self.last_prompt = item.prompt
        self.engine = item.engine
        self.resolution = item.resolution
        self.aspect_ratio = item.aspect_ratio
        return item
