"""
reCAPTCHA v3 bot-score verification.

Keys configured in the environment (or env.yaml) win over the ones stored in
the settings table. Database configuration is cached for a short TTL and
must be invalidated whenever an administrator changes it.
"""

import logging
from typing import Awaitable, Callable, Dict, Iterable, Optional

import httpx
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from council_admin.app.services.bot_verifier import (
    BotConfigurationStatus,
    BotVerification,
    BotVerifier,
)
from council_admin.app.services.settings_cache import SettingsCache

logger = logging.getLogger(__name__)

RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"
DEFAULT_THRESHOLD = 0.5

RECAPTCHA_SETTING_KEYS = (
    "recaptcha_enabled",
    "recaptcha_site_key",
    "recaptcha_secret_key",
    "recaptcha_threshold",
)

SettingsLoader = Callable[[Iterable[str]], Awaitable[Dict[str, str]]]


class RecaptchaConfig(BaseModel):
    enabled: bool
    site_key: Optional[str] = None
    secret_key: Optional[str] = None
    threshold: float = DEFAULT_THRESHOLD
    source: str = "database"


def _parse_threshold(value: Optional[str]) -> float:
    try:
        return float(value) if value else DEFAULT_THRESHOLD
    except ValueError:
        return DEFAULT_THRESHOLD


class RecaptchaConfigProvider:
    def __init__(
        self,
        config,
        load_settings: SettingsLoader,
        cache: SettingsCache[RecaptchaConfig],
    ):
        self.config = config
        self.load_settings = load_settings
        self.cache = cache

    def _from_environment(self) -> Optional[RecaptchaConfig]:
        if not (self.config.RECAPTCHA_SECRET_KEY and self.config.RECAPTCHA_SITE_KEY):
            return None
        return RecaptchaConfig(
            enabled=self.config.RECAPTCHA_ENABLED,
            site_key=self.config.RECAPTCHA_SITE_KEY,
            secret_key=self.config.RECAPTCHA_SECRET_KEY,
            threshold=self.config.RECAPTCHA_THRESHOLD,
            source="environment",
        )

    async def get(self, use_cache: bool = True) -> RecaptchaConfig:
        env_config = self._from_environment()
        if env_config is not None:
            return env_config

        if use_cache:
            cached = self.cache.get()
            if cached is not None:
                return cached

        try:
            values = await self.load_settings(RECAPTCHA_SETTING_KEYS)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load reCAPTCHA settings: {e}")
            return RecaptchaConfig(enabled=False)

        loaded = RecaptchaConfig(
            enabled=values.get("recaptcha_enabled") == "true",
            site_key=values.get("recaptcha_site_key") or None,
            secret_key=values.get("recaptcha_secret_key") or None,
            threshold=_parse_threshold(values.get("recaptcha_threshold")),
        )
        self.cache.set(loaded)
        return loaded

    def invalidate(self) -> None:
        self.cache.invalidate()


class RecaptchaVerifier(BotVerifier):
    def __init__(
        self,
        provider: RecaptchaConfigProvider,
        http_client: httpx.AsyncClient,
        fail_open: bool = True,
    ):
        self.provider = provider
        self.http_client = http_client
        self.fail_open = fail_open

    async def verify(self, token: Optional[str], action: Optional[str] = None) -> BotVerification:
        config = await self.provider.get()

        if not config.enabled:
            logger.debug("reCAPTCHA is disabled, skipping verification")
            return BotVerification(success=True, score=1.0)

        if not config.secret_key:
            if self.fail_open:
                logger.warning("reCAPTCHA secret key not configured, skipping verification")
                return BotVerification(success=True, score=1.0)
            return BotVerification(success=False, score=0.0, error="reCAPTCHA is not configured")

        if not token:
            return BotVerification(success=False, score=0.0, error="No reCAPTCHA token provided")

        try:
            response = await self.http_client.post(
                RECAPTCHA_VERIFY_URL,
                data={"secret": config.secret_key, "response": token},
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"reCAPTCHA verification request failed: {e}")
            return BotVerification(success=False, score=0.0, error="Verification request failed")

        if not data.get("success"):
            error_codes = data.get("error-codes") or []
            return BotVerification(
                success=False,
                score=0.0,
                error=", ".join(error_codes) or "Verification failed",
            )

        score = float(data.get("score") or 0.0)
        if score < config.threshold:
            return BotVerification(success=False, score=score, error="reCAPTCHA score too low")

        if action and data.get("action") and data["action"] != action:
            return BotVerification(success=False, score=score, error="reCAPTCHA action mismatch")

        return BotVerification(success=True, score=score)

    async def test_configuration(self) -> BotConfigurationStatus:
        """Probe the configured secret with a token Google is certain to reject"""
        config = await self.provider.get(use_cache=False)

        if not config.enabled:
            return BotConfigurationStatus(
                success=True,
                status="disabled",
                message="reCAPTCHA is currently disabled. Enable it to activate protection.",
            )

        if not config.site_key or not config.secret_key:
            return BotConfigurationStatus(
                success=False,
                status="not_configured",
                message="reCAPTCHA keys are not configured. Please enter both Site Key and Secret Key.",
            )

        try:
            response = await self.http_client.post(
                RECAPTCHA_VERIFY_URL,
                data={"secret": config.secret_key, "response": "test-token-invalid"},
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"reCAPTCHA configuration test failed: {e}")
            return BotConfigurationStatus(
                success=False,
                status="request_failed",
                message="Failed to test reCAPTCHA configuration. Please try again.",
            )

        if "invalid-input-secret" in (data.get("error-codes") or []):
            return BotConfigurationStatus(
                success=False,
                status="invalid_secret",
                message="Invalid Secret Key. Please check your reCAPTCHA credentials.",
            )

        return BotConfigurationStatus(
            success=True,
            status="configured",
            message="reCAPTCHA configuration is valid! Your forms are protected.",
        )

    def invalidate(self) -> None:
        self.provider.invalidate()
