"""Unified settings: CLI flags and env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``UJCON_*`` prefix (plus the bare ``MOCK_RATE``)
  3. Code defaults

No config file is read.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


class UjconSettings(BaseSettings):
    """Settings for the ujcon CLI, stored on :class:`AppContext`.

    Attributes:
        mock_rate: Fixed JPY-per-USD rate that bypasses the network.  Read
            from ``UJCON_MOCK_RATE`` or ``MOCK_RATE``.  A value that does not
            parse as a number is ignored.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "UJCON_",
        "populate_by_name": True,
    }

    # --- CLI flags ---
    verbose: bool = False
    log_json: bool = False

    # --- Env-only ---
    mock_rate: float | None = Field(
        default=None,
        validation_alias=AliasChoices("UJCON_MOCK_RATE", "MOCK_RATE", "mock_rate"),
    )

    @field_validator("mock_rate", mode="before")
    @classmethod
    def _ignore_unparsable_rate(cls, value: Any) -> Any:
        if value is None or isinstance(value, (int, float)):
            return value
        try:
            return float(str(value).strip())
        except ValueError:
            return None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only init kwargs and environment variables."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> UjconSettings:
        """Construct settings from a CLI invocation.

        Unset flags (``None`` or ``False``) fall through to the environment,
        so ``UJCON_VERBOSE=1`` works without ``-v``.
        """
        return cls(**{k: v for k, v in cli_flags.items() if v is not None and v is not False})
