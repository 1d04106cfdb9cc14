"""
Environment-driven settings.

Environment Variables:
    DIDSIGN_NETWORK: Network for signer addresses (name or prefix) - default: kilt
    DIDSIGN_DID_METHOD: DID method in signer key URIs - default: kilt
    DIDSIGN_DERIVATION_PATH: Signing key derivation path - default: //did//0
    DIDSIGN_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR - default: INFO
    DIDSIGN_LOG_FORMAT: json, text - default: text
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, field_validator

from .keys.junction import DID_AUTHENTICATION_PATH, is_valid_path
from .ss58.registry import REGISTRY, NetworkPrefix

ENV_PREFIX = "DIDSIGN_"


class SignerSettings(BaseModel):
    network: str = "kilt"
    did_method: str = "kilt"
    derivation_path: str = DID_AUTHENTICATION_PATH
    log_level: str = "INFO"
    log_format: str = "text"

    @field_validator("network")
    @classmethod
    def _known_network(cls, value: str) -> str:
        # Raises UnknownNetworkError (a ValueError) for unregistered networks
        return REGISTRY.get(value).name

    @field_validator("did_method")
    @classmethod
    def _did_method(cls, value: str) -> str:
        value = value.strip()
        if not value or not value.replace("-", "").isalnum() or value != value.lower():
            raise ValueError(f"Invalid DID method: {value!r}")
        return value

    @field_validator("derivation_path")
    @classmethod
    def _derivation_path(cls, value: str) -> str:
        if not is_valid_path(value):
            raise ValueError(f"Invalid derivation path: {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {value}")
        return value

    @field_validator("log_format")
    @classmethod
    def _log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "text"):
            raise ValueError(f"Invalid log format: {value}")
        return value

    @property
    def network_prefix(self) -> NetworkPrefix:
        return REGISTRY.get(self.network)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> SignerSettings:
    """
    Build settings from DIDSIGN_* environment variables.

    Unset or empty variables fall back to defaults.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value
    """
    env = os.environ if environ is None else environ
    values = {}
    for field in SignerSettings.model_fields:
        raw = env.get(ENV_PREFIX + field.upper())
        if raw:
            values[field] = raw
    return SignerSettings(**values)
