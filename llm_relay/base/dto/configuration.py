"""
Pydantic DTO for configuration mappings.

Purpose
-------
Validate the merged configuration mapping produced by
``llm_relay.config.load_configuration`` (defaults, environment, optional file
and overrides) and convert it into the immutable ``Configuration`` value.

Notes
-----
- Accepts the camelCase keys (``apiKey``,
  ``baseURL``, ``provider``) as aliases so exported settings files load
  unchanged.
- Booleans from the environment arrive as strings; pydantic's lax mode maps
  ``"1"``, ``"true"``, ``"yes"`` and friends.
"""
from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..models import Configuration, Vendor


class ConfigurationDTO(BaseModel):
    """Validated configuration mapping."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    vendor: Vendor = Field(default=Vendor.OPENAI, validation_alias=AliasChoices("vendor", "provider"))
    api_key: str = Field(default="", validation_alias=AliasChoices("api_key", "apiKey"))
    base_url: str = Field(default="", validation_alias=AliasChoices("base_url", "baseURL", "baseUrl"))
    model: str = ""
    enabled: bool = False

    @field_validator("vendor", mode="before")
    @classmethod
    def _parse_vendor(cls, v):
        return Vendor.parse(v) if v is not None else Vendor.OPENAI

    @field_validator("api_key", "base_url", "model", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    def to_configuration(self) -> Configuration:
        return Configuration.with_defaults(
            self.vendor,
            api_key=self.api_key.strip(),
            base_url=self.base_url.strip(),
            model=self.model.strip(),
            enabled=self.enabled,
        )


__all__ = ["ConfigurationDTO"]
