"""Resolver configuration."""

import os
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .schemas import SizeSpec

ENV_NAME_PREFIX = "CL_THUMBNAILS_NAME_PREFIX"
ENV_RETINA = "CL_THUMBNAILS_RETINA"

_TRUTHY = {"1", "true", "yes", "on"}


class ResolverConfig(BaseModel):
    """Configuration of a ThumbnailResolver.

    Attributes:
        name_prefix: Prefix of generated intermediate size names ("{prefix}_{suffix}")
        retina_support: Also produce a 2x companion for every non-retina thumbnail
        presets: Named sizes, requested by name
    """

    name_prefix: str = Field("cl", min_length=1)
    retina_support: bool = False
    presets: dict[str, SizeSpec] = Field(default_factory=dict)

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    @classmethod
    def from_env(cls, presets: dict[str, SizeSpec] | None = None) -> "ResolverConfig":
        """Build a config from CL_THUMBNAILS_* environment variables."""
        prefix = os.environ.get(ENV_NAME_PREFIX) or "cl"
        retina = os.environ.get(ENV_RETINA, "").strip().lower() in _TRUTHY
        return cls(name_prefix=prefix, retina_support=retina, presets=presets or {})
