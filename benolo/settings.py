from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone

from cryptography.fernet import Fernet, InvalidToken

from benolo.models import AppSettings

logger = logging.getLogger(__name__)
_FERNET: Fernet | None = None

FOOTBALL_DATA_KEY_ENV = ("FOOTBALL_DATA_API_KEY", "EDGE_FOOTBALL_DATA_API_KEY")
API_FOOTBALL_KEY_ENV = ("SPORTS_DATA_API_KEY", "EDGE_SPORTS_DATA_API_KEY")


@dataclass(frozen=True)
class SettingsSnapshot:
    id: int
    football_data_api_key_enc: str | None
    api_football_api_key_enc: str | None


@dataclass(frozen=True)
class ProviderCredentials:
    football_data_api_key: str | None = None
    api_football_api_key: str | None = None


def _default_settings() -> AppSettings:
    return AppSettings(
        id=1,
        football_data_api_key_enc=None,
        api_football_api_key_enc=None,
        updated_at_utc=datetime.now(timezone.utc),
    )


def get_or_create_settings(db) -> AppSettings:
    settings = db.query(AppSettings).filter(AppSettings.id == 1).one_or_none()
    if settings:
        return settings
    settings = _default_settings()
    db.add(settings)
    db.commit()
    db.refresh(settings)
    return settings


def snapshot_settings(settings: AppSettings) -> SettingsSnapshot:
    return SettingsSnapshot(
        id=settings.id,
        football_data_api_key_enc=settings.football_data_api_key_enc,
        api_football_api_key_enc=settings.api_football_api_key_enc,
    )


def get_fernet() -> Fernet:
    global _FERNET
    if _FERNET is not None:
        return _FERNET
    secret = (os.getenv("APP_SECRET_KEY") or "").strip()
    if not secret:
        secret = Fernet.generate_key().decode("utf-8")
        logger.warning(
            "APP_SECRET_KEY missing. Generated a temporary key: %s. "
            "Set APP_SECRET_KEY to this value to persist decryption.",
            secret,
        )
    _FERNET = Fernet(secret.encode("utf-8"))
    return _FERNET


def encrypt_api_key(api_key: str | None) -> str | None:
    if not api_key:
        return None
    fernet = get_fernet()
    return fernet.encrypt(api_key.encode("utf-8")).decode("utf-8")


def decrypt_api_key(encrypted: str | None) -> str | None:
    if not encrypted:
        return None
    fernet = get_fernet()
    try:
        return fernet.decrypt(encrypted.encode("utf-8")).decode("utf-8")
    except InvalidToken:
        logger.error("Failed to decrypt provider API key. Check APP_SECRET_KEY.")
        return None


def _first_env(*keys: str) -> str | None:
    for key in keys:
        value = (os.getenv(key) or "").strip()
        if value:
            return value
    return None


def resolve_provider_credentials(snapshot: SettingsSnapshot | None = None) -> ProviderCredentials:
    """Environment keys win; stored (encrypted) keys fill the gaps."""
    football_data = _first_env(*FOOTBALL_DATA_KEY_ENV)
    api_football = _first_env(*API_FOOTBALL_KEY_ENV)
    if snapshot is not None:
        football_data = football_data or decrypt_api_key(snapshot.football_data_api_key_enc)
        api_football = api_football or decrypt_api_key(snapshot.api_football_api_key_enc)
    return ProviderCredentials(
        football_data_api_key=football_data,
        api_football_api_key=api_football,
    )


def load_provider_credentials(db) -> ProviderCredentials:
    settings = get_or_create_settings(db)
    return resolve_provider_credentials(snapshot_settings(settings))


def store_provider_keys(
    db,
    *,
    football_data_api_key: str | None = None,
    api_football_api_key: str | None = None,
) -> AppSettings:
    settings = get_or_create_settings(db)
    if football_data_api_key:
        settings.football_data_api_key_enc = encrypt_api_key(football_data_api_key.strip())
    if api_football_api_key:
        settings.api_football_api_key_enc = encrypt_api_key(api_football_api_key.strip())
    settings.updated_at_utc = datetime.now(timezone.utc)
    db.commit()
    return settings
