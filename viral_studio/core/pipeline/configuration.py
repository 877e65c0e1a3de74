"""
Model configuration resolver.

Loads the active model name and sampling parameters from the
configuration store. Incomplete configuration is a hard stop: there are
no soft defaults for sampling parameters.
"""

import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from ..models.errors import ConfigurationError
from ..models.llm import ModelConfiguration
from ..ports import ConfigurationStore


logger = logging.getLogger(__name__)

# Setting name -> accepted keys in the stored settings object
REQUIRED_SETTINGS = {
    "temperature": ("temperature",),
    "max_tokens": ("max_tokens", "maxTokens"),
    "top_p": ("top_p", "topP"),
    "frequency_penalty": ("frequency_penalty", "frequencyPenalty"),
    "presence_penalty": ("presence_penalty", "presencePenalty"),
}

MODEL_NAME_KEYS = ("model_type", "model_name", "model")


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def decode_settings(raw_settings: Any) -> Dict[str, Any]:
    """
    Decode the nested settings object.

    Accepts a native mapping or a JSON-encoded object.

    Raises:
        ConfigurationError: If the value is absent or not a JSON object
    """
    if isinstance(raw_settings, dict):
        return raw_settings

    if isinstance(raw_settings, (str, bytes)):
        try:
            decoded = json.loads(raw_settings)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Model settings could not be decoded: {str(e)}",
                config_key="settings"
            )
        if isinstance(decoded, dict):
            return decoded

    raise ConfigurationError(
        "Model settings could not be decoded: expected a JSON object",
        config_key="settings"
    )


class ModelConfigurationResolver:
    """
    Resolve the active ModelConfiguration.

    Callers resolve once per batch; the active row can change between
    requests so results are not cached here.
    """

    def __init__(self, store: ConfigurationStore, provider: Optional[str] = None):
        self.store = store
        self.provider = provider

    async def resolve_active_model_configuration(self) -> ModelConfiguration:
        """
        Read and validate the active configuration row.

        Raises:
            ConfigurationError: No active row, undecodable settings, or a
                missing model name or sampling parameter
        """
        row = await self.store.fetch_active_model_row()
        if not row:
            raise ConfigurationError(
                "No active model configuration found",
                config_key="is_active"
            )

        model_name = next(
            (row[key] for key in MODEL_NAME_KEYS if not _is_missing(row.get(key))),
            None
        )
        if model_name is None:
            raise ConfigurationError(
                "Active model configuration has no model name",
                config_key="model_type"
            )

        settings = decode_settings(row.get("settings"))

        values = {}
        missing = []
        for name, keys in REQUIRED_SETTINGS.items():
            value = next((settings[key] for key in keys if not _is_missing(settings.get(key))), None)
            if value is None:
                missing.append(name)
            else:
                values[name] = value

        if missing:
            raise ConfigurationError(
                f"Active model configuration is missing: {', '.join(missing)}",
                config_key=missing[0]
            )

        try:
            configuration = ModelConfiguration(
                model_name=str(model_name),
                provider=row.get("provider") or self.provider,
                **values
            )
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Active model configuration is invalid: {str(e)}",
                config_key="settings"
            )

        logger.info(f"Resolved active model configuration: {configuration.model_string}")
        return configuration
