"""
Volcengine (Seedream) image generation adapter over the Ark HTTP API.
"""
import logging
from typing import Any, Callable, Dict, Optional

import requests

from .. import config as settings
from ..dimensions import resolve_dimensions
from ..errors import AuthorizationError, ConfigurationError, NoImageReturnedError, ProviderResponseError
from ..models import Engine, GenerationResult, RenderConfig, VolcengineConfig
from ..utils import to_data_uri
from .base import EngineAdapter, looks_like_permission_error

logger = logging.getLogger(__name__)

# Checked in this order
IMAGE_FIELDS = ('url', 'image_url', 'binary_data')


def _error_message(response: requests.Response) -> Optional[str]:
    try:
        error_data = response.json()
    except ValueError:
        return None
    if isinstance(error_data, dict):
        error = error_data.get('error')
        if isinstance(error, dict):
            return error.get('message')
    return None


class VolcengineAdapter(EngineAdapter):
    """
    Posts a JSON generation request with explicit pixel sizes and a strength value.

    Unlike Gemini the source image travels as a full data URI.
    """

    engine = Engine.SECONDARY
    requires_pixel_dimensions = True

    def __init__(self, config_provider: Callable[[], VolcengineConfig], api_url: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.config_provider = config_provider
        self.api_url = api_url
        self.timeout = timeout

    def build_payload(self, image: str, prompt: str, config: RenderConfig, endpoint_id: str) -> Dict[str, Any]:
        if config.width and config.height:
            width, height = config.width, config.height
        else:
            width, height = resolve_dimensions(config.aspect_ratio, config.resolution)

        payload = {
            'model': endpoint_id,
            # Seedream follows the ratio more reliably when it is also in the prompt
            'prompt': f"{prompt} --ar {config.aspect_ratio.replace(':', '-')}",
            'image': to_data_uri(image),
            'width': width,
            'height': height,
            'strength': config.strength,
            'watermark': False,
        }
        if config.scale is not None:
            payload['scale'] = config.scale
        if config.seed is not None and config.seed >= 0:
            payload['seed'] = config.seed
        if config.negative_prompt:
            payload['negative_prompt'] = config.negative_prompt
        return payload

    def generate(self, image: str, prompt: str, config: RenderConfig) -> GenerationResult:
        volc_config = self.config_provider()
        if not volc_config.api_key or not volc_config.endpoint_id:
            raise ConfigurationError("Volcengine API key and endpoint ID must both be configured")

        payload = self.build_payload(image, prompt, config, volc_config.endpoint_id)
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f"Bearer {volc_config.api_key}",
        }
        api_url = self.api_url or settings.get_volcengine_api_url()
        timeout = self.timeout if self.timeout is not None else settings.get_volcengine_timeout()

        logger.info(f"🎨 Volcengine request ({payload['width']}x{payload['height']}, strength={payload['strength']})")
        try:
            response = requests.post(api_url, headers=headers, json=payload, timeout=timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ Volcengine request failed: {e}")
            raise ProviderResponseError(f"Volcengine request failed: {e}") from e

        if not response.ok:
            message = _error_message(response) or f"API Error ({response.status_code})"
            logger.error(f"❌ Volcengine API error {response.status_code}: {message}")
            if response.status_code in (401, 403) or looks_like_permission_error(message):
                raise AuthorizationError(message, status=response.status_code)
            raise ProviderResponseError(message, status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderResponseError("Volcengine returned a malformed response",
                                        status=response.status_code) from e

        items = data.get('data') if isinstance(data, dict) else None
        first = items[0] if isinstance(items, list) and items and isinstance(items[0], dict) else {}
        for field_name in IMAGE_FIELDS:
            value = first.get(field_name)
            if not isinstance(value, str) or not value:
                continue
            if field_name == 'binary_data' and not value.startswith('data:'):
                value = f"data:image/png;base64,{value}"
            logger.info(f"✅ Volcengine returned an image ({field_name})")
            return GenerationResult(image_data=value)

        raise NoImageReturnedError("Volcengine did not return an image", status=response.status_code)
