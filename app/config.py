"""Runtime settings read from CSV_CLEANER_* environment variables."""

from __future__ import annotations

import codecs
import logging
import os
from functools import lru_cache
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .rules import OUTPUT_ENCODING, OUTPUT_PREFIX

ENV_PREFIX = "CSV_CLEANER_"


class Settings(BaseModel):
    log_level: str = "INFO"
    max_upload_bytes: int = Field(default=20 * 1024 * 1024, gt=0)
    deduplicate: bool = True
    sanitize_fields: bool = True
    output_prefix: str = OUTPUT_PREFIX
    output_encoding: str = OUTPUT_ENCODING

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"not a logging level: {value!r}")
        return level

    @field_validator("output_encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        encoding = value.strip()
        try:
            codecs.lookup(encoding)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {value!r}") from exc
        return encoding


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    data = {
        name: env[ENV_PREFIX + name.upper()]
        for name in Settings.model_fields
        if ENV_PREFIX + name.upper() in env
    }
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid {ENV_PREFIX}* setting: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
