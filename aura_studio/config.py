"""
Configuration
Environment loading, credential resolution and logging setup
"""

import os
import logging
from typing import Optional, Dict, Any, List, Union

from dotenv import load_dotenv

from .models import EditIntent, VolcengineConfig

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_IMAGE_MODEL = 'gemini-2.5-flash-image'
DEFAULT_GEMINI_HIGH_RES_MODELS = 'gemini-3-pro-image-preview'
DEFAULT_VOLCENGINE_API_URL = 'https://ark.cn-beijing.volces.com/api/v3/images/generations'
DEFAULT_STRENGTH = 0.65
DEFAULT_HISTORY_LIMIT = 10
DEFAULT_SCALE = 7.5


def load_env(extra_paths: Optional[List[str]] = None) -> Optional[str]:
    """
    Load the first .env file found

    Returns:
        str: Path that was loaded, or None if only the process environment is used
    """
    env_paths = list(extra_paths or []) + [
        os.path.join(os.getcwd(), '.env'),
        os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), '.env'),
    ]
    for env_path in env_paths:
        if os.path.exists(env_path):
            load_dotenv(env_path)
            logger.info(f"✅ Loaded .env from: {env_path}")
            return env_path
    logger.info("⚠️ No .env file found. Using system environment variables only.")
    return None


def setup_logging(level: Optional[str] = None) -> None:
    level_name = (level or os.getenv('AURA_LOG_LEVEL', 'INFO')).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def get_gemini_image_model() -> str:
    """
    Returns the Gemini model id used for image editing.

    Override via GEMINI_IMAGE_MODEL to avoid code changes when preview model ids are retired.
    """
    return os.getenv('GEMINI_IMAGE_MODEL', DEFAULT_GEMINI_IMAGE_MODEL)


def get_gemini_high_res_models() -> List[str]:
    """Models that accept image size/aspect ratio config and need an elevated (billed) key"""
    value = os.getenv('GEMINI_HIGH_RES_MODELS', DEFAULT_GEMINI_HIGH_RES_MODELS)
    return [m.strip() for m in value.split(',') if m.strip()]


def get_volcengine_api_url() -> str:
    return os.getenv('VOLCENGINE_API_URL', DEFAULT_VOLCENGINE_API_URL)


def get_volcengine_timeout() -> Optional[float]:
    """Request timeout in seconds; None leaves it to the transport"""
    value = (os.getenv('VOLCENGINE_TIMEOUT_S') or '').strip()
    return float(value) if value else None


def get_history_limit() -> int:
    return int(os.getenv('AURA_HISTORY_LIMIT', str(DEFAULT_HISTORY_LIMIT)))


def get_default_strength(intent: Optional[Union[EditIntent, str]] = None) -> float:
    """
    Strength sent to the secondary provider (0 = identical, 1 = fully different).

    A tunable default: AURA_STRENGTH_<INTENT> wins over AURA_DEFAULT_STRENGTH.
    """
    if intent is not None:
        override = os.getenv(f"AURA_STRENGTH_{EditIntent(intent).value}")
        if override:
            return float(override)
    return float(os.getenv('AURA_DEFAULT_STRENGTH', str(DEFAULT_STRENGTH)))


class CredentialResolver:
    """
    Resolves provider credentials at call time.

    Saved settings (the record the settings panel writes) win over the
    environment. Nothing is cached, so edits take effect on the next call.
    """

    def __init__(self, settings_storage=None):
        self.settings_storage = settings_storage

    def _settings(self) -> Dict[str, Any]:
        if self.settings_storage is None:
            return {}
        settings = self.settings_storage.load()
        return settings if isinstance(settings, dict) else {}

    def gemini_api_key(self) -> str:
        stored = self._settings().get('gemini_api_key')
        return stored or os.getenv('GEMINI_API_KEY') or os.getenv('GOOGLE_API_KEY') or ''

    def volcengine_config(self) -> VolcengineConfig:
        stored = VolcengineConfig.from_dict(self._settings().get('volc_config'))
        return VolcengineConfig(
            api_key=stored.api_key or os.getenv('VOLCENGINE_API_KEY', ''),
            endpoint_id=stored.endpoint_id or os.getenv('VOLCENGINE_ENDPOINT_ID', ''),
        )

    def save_gemini_api_key(self, api_key: str) -> None:
        self._update({'gemini_api_key': api_key})

    def save_volcengine_config(self, config: VolcengineConfig) -> None:
        self._update({'volc_config': config.to_dict()})

    def _update(self, values: Dict[str, Any]) -> None:
        if self.settings_storage is None:
            raise RuntimeError("No settings storage configured")
        settings = self._settings()
        settings.update(values)
        self.settings_storage.save(settings)


def check_environment(credentials: Optional[CredentialResolver] = None) -> Dict[str, bool]:
    """Report which providers have credentials configured"""
    credentials = credentials or CredentialResolver()
    status = {
        'gemini': bool(credentials.gemini_api_key()),
        'volcengine': credentials.volcengine_config().is_complete,
    }
    if status['gemini']:
        logger.info("✅ Gemini API key configured")
    else:
        logger.warning("❌ GEMINI_API_KEY not found")
    if status['volcengine']:
        logger.info("✅ Volcengine API key and endpoint configured")
    else:
        logger.warning("⚠️ Volcengine API key or endpoint ID missing")
    return status
