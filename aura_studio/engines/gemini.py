"""
Gemini image editing adapter built on google-genai.
"""
import base64
import logging
from typing import Callable, Optional

import google.genai as genai
from google.genai import errors as genai_errors
from google.genai import types

from .. import config as settings
from ..errors import AuthorizationError, ConfigurationError, NoImageReturnedError, ProviderResponseError
from ..models import Engine, GenerationResult, RenderConfig
from ..utils import bytes_to_data_uri, parse_data_uri
from .base import EngineAdapter, looks_like_permission_error

logger = logging.getLogger(__name__)

INVALID_KEY_MARKERS = ('API key not valid', 'Requested entity was not found')


def _iter_gemini_response_parts(response):
    """
    Normalize response parts across google-genai SDK versions.

    Some versions expose `response.parts`; others expose `response.candidates[0].content.parts`.
    """
    if response is None:
        return []
    parts = getattr(response, "parts", None)
    if parts is not None:
        return parts
    candidates = getattr(response, "candidates", None)
    if candidates:
        content = getattr(candidates[0], "content", None)
        if content is not None:
            return getattr(content, "parts", []) or []
    return []


def _is_authorization_failure(message: str) -> bool:
    return looks_like_permission_error(message) or any(m in message for m in INVALID_KEY_MARKERS)


class GeminiAdapter(EngineAdapter):
    """
    Sends image and instruction together to a Gemini image model.

    The API key is looked up on every call so that a key changed in the
    settings panel is picked up without rebuilding the adapter.
    """

    engine = Engine.PRIMARY

    def __init__(self, api_key_provider: Callable[[], str], model: Optional[str] = None,
                 client_factory: Callable[..., genai.Client] = genai.Client):
        self.api_key_provider = api_key_provider
        self._model = model
        self.client_factory = client_factory

    @property
    def model(self) -> str:
        return self._model or settings.get_gemini_image_model()

    @property
    def requires_elevated_credential(self) -> bool:
        return self.model in settings.get_gemini_high_res_models()

    def _build_config(self, config: RenderConfig) -> types.GenerateContentConfig:
        config_kwargs = {"response_modalities": ["IMAGE"]}
        if self.requires_elevated_credential:
            config_kwargs["image_config"] = types.ImageConfig(
                image_size=config.resolution,
                aspect_ratio=config.aspect_ratio,
            )
        if config.seed is not None and config.seed >= 0:
            config_kwargs["seed"] = config.seed
        return types.GenerateContentConfig(**config_kwargs)

    def generate(self, image: str, prompt: str, config: RenderConfig) -> GenerationResult:
        api_key = self.api_key_provider()
        if not api_key:
            raise ConfigurationError("Gemini API key is not configured")

        mime_type, image_bytes = parse_data_uri(image)
        contents = [
            types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            prompt,
        ]

        model = self.model
        logger.info(f"🎨 Gemini request (model={model}, resolution={config.resolution}, "
                    f"aspect_ratio={config.aspect_ratio})")
        client = self.client_factory(api_key=api_key)
        try:
            response = client.models.generate_content(
                model=model,
                contents=contents,
                config=self._build_config(config),
            )
        except genai_errors.APIError as e:
            message = f"{e.code} {e.status} {e.message}"
            logger.error(f"❌ Gemini API error: {message}")
            if e.code in (401, 403) or _is_authorization_failure(message):
                raise AuthorizationError(e.message or message, status=e.code) from e
            raise ProviderResponseError(e.message or message, status=e.code) from e
        except Exception as e:
            message = str(e)
            logger.error(f"❌ Gemini request failed: {message}")
            if _is_authorization_failure(message):
                raise AuthorizationError(message, status=403 if '403' in message else None) from e
            raise ProviderResponseError(message or "Gemini request failed") from e

        for part in _iter_gemini_response_parts(response):
            inline = getattr(part, "inline_data", None)
            data = getattr(inline, "data", None) if inline is not None else None
            if not data:
                continue
            out_mime = getattr(inline, "mime_type", None) or 'image/png'
            if isinstance(data, str):
                # Some transports hand back the base64 text unchanged
                data = base64.b64decode(data)
            logger.info("✅ Gemini returned an image")
            return GenerationResult(image_data=bytes_to_data_uri(data, out_mime))

        feedback = str(getattr(response, "prompt_feedback", "") or "")
        if feedback and looks_like_permission_error(feedback):
            raise AuthorizationError(feedback)
        raise NoImageReturnedError("Gemini did not return image data", details=feedback or None)
