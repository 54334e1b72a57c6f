"""
Error Taxonomy
Classified failures returned to the UI layer; nothing here is retried automatically
"""

from datetime import datetime
from typing import Optional, Dict, Any

# Error codes for different types of failures
ERROR_CODES = {
    'CONFIG_001': 'Missing credential or endpoint',
    'CONFIG_002': 'No adapter registered for engine',
    'VALIDATION_001': 'Missing required parameter',
    'VALIDATION_002': 'Generation already in progress',
    'AUTH_001': 'Provider rejected credential',
    'PROVIDER_001': 'Provider request failed',
    'PROVIDER_002': 'Provider returned no image',
    'SERVICE_003': 'Internal processing error',
}


class AuraError(Exception):
    """Base class for every classified failure"""

    error_code = 'SERVICE_003'

    def __init__(self, message: Optional[str] = None, status: Optional[int] = None,
                 details: Optional[str] = None):
        self.message = message or ERROR_CODES.get(self.error_code, 'Unknown error')
        self.status = status
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Create standardized error response

        Returns:
            dict: Error response dictionary
        """
        return {
            'success': False,
            'error': self.message,
            'error_code': self.error_code,
            'details': self.details,
            'status': self.status,
            'timestamp': datetime.utcnow().isoformat()
        }


class ConfigurationError(AuraError):
    """A required credential or endpoint is missing; raised before any network call"""
    error_code = 'CONFIG_001'


class ValidationError(AuraError):
    error_code = 'VALIDATION_001'


class ProviderError(AuraError):
    """Failure reported by (or while talking to) an image provider"""
    error_code = 'PROVIDER_001'


class AuthorizationError(ProviderError):
    """Provider rejected the credential or the account's billing status"""

    error_code = 'AUTH_001'
    hint = 'Reselect or update the API key for this engine, then try again.'

    def to_dict(self) -> Dict[str, Any]:
        response = super().to_dict()
        response['hint'] = self.hint
        return response


class ProviderResponseError(ProviderError):
    error_code = 'PROVIDER_001'


class NoImageReturnedError(ProviderResponseError):
    """Structurally successful response without an extractable image"""
    error_code = 'PROVIDER_002'


class GenerationInProgressError(ValidationError):
    error_code = 'VALIDATION_002'
