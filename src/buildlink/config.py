"""Codec configuration, passed explicitly to the encoder and decoder."""

import os
from dataclasses import dataclass, field

from .personas import PersonaCatalog
from .registry import DEFAULT_REGISTRY, IdRegistry
from .safety import DEFAULT_TIERS, TierMap

SCHEMA_VERSION = 1
MAX_ARRAY_LENGTH = 100
MAX_PAYLOAD_LENGTH = 5000
MAX_DECOMPRESSED_BYTES = 64 * 1024
URL_LENGTH_WARNING_THRESHOLD = 2000
DEFAULT_ORIGIN = "https://rocktune.pedroferrari.com"


@dataclass(frozen=True)
class CodecConfig:
    registry: IdRegistry = DEFAULT_REGISTRY
    tiers: TierMap = DEFAULT_TIERS
    personas: PersonaCatalog = field(default_factory=PersonaCatalog.bundled)
    schema_version: int = SCHEMA_VERSION
    max_array_length: int = MAX_ARRAY_LENGTH
    max_payload_length: int = MAX_PAYLOAD_LENGTH
    max_decompressed_bytes: int = MAX_DECOMPRESSED_BYTES
    url_warning_threshold: int = URL_LENGTH_WARNING_THRESHOLD
    origin: str = DEFAULT_ORIGIN

    @classmethod
    def from_env(cls, **overrides) -> "CodecConfig":
        """Production config with service settings read from the environment."""
        settings = {
            "origin": os.getenv("SHARE_ORIGIN", DEFAULT_ORIGIN),
            "url_warning_threshold": int(os.getenv(
                "SHARE_URL_WARNING_THRESHOLD", URL_LENGTH_WARNING_THRESHOLD)),
        }
        settings.update(overrides)
        return cls(**settings)
