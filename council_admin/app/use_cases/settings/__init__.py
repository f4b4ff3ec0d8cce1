"""
Settings Use Cases

Administrator changes to settings-backed integrations.
"""

from .update_recaptcha_settings_use_case import UpdateRecaptchaSettingsUseCase
from .check_recaptcha_use_case import CheckRecaptchaUseCase
from .invalidate_caches_use_case import InvalidateCachesUseCase
from .dtos import (
    UpdateRecaptchaSettingsCommand,
    RecaptchaSettingsResponse,
    InvalidateCachesResponse,
)

__all__ = [
    "UpdateRecaptchaSettingsUseCase",
    "CheckRecaptchaUseCase",
    "InvalidateCachesUseCase",
    "UpdateRecaptchaSettingsCommand",
    "RecaptchaSettingsResponse",
    "InvalidateCachesResponse",
]
