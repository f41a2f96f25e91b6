"""Typed configuration schema and loader for the scrambler package."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, SecretStr, conint, field_validator

_LANGUAGE_RE = re.compile(r"[A-Za-z]{2}\Z")

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class ContentOptions(BaseModel):
    """Which document regions count as replaceable content.

    ``aggressive`` widens the policy to string literals and raw bodies, which
    are more likely to change how the document behaves.
    """

    aggressive: bool
    text: bool
    comments: bool
    links: bool
    strings: bool
    raw: bool

    model_config = ConfigDict(extra="forbid")


class SubstitutionSettings(BaseModel):
    """Word substitution behaviour."""

    min_bucket_size: conint(ge=1)
    preserve_case: bool
    consistent: bool

    model_config = ConfigDict(extra="forbid")


class WordlistSettings(BaseModel):
    """Optional wordlist used for realistic substitutes."""

    path: Path | None = None

    model_config = ConfigDict(extra="forbid")


class SeedSettings(BaseModel):
    """Settings for reproducible random streams."""

    secret_env: str
    secret: SecretStr | None = None

    model_config = ConfigDict(extra="forbid")


class VerificationSettings(BaseModel):
    """Structure verification after substitution."""

    fail_on_mismatch: bool

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    language: str
    content: ContentOptions
    substitution: SubstitutionSettings
    wordlist: WordlistSettings
    seed: SeedSettings
    verification: VerificationSettings

    model_config = ConfigDict(extra="forbid")

    @field_validator("language")
    @classmethod
    def _check_language(cls, value: str) -> str:
        if not _LANGUAGE_RE.match(value):
            raise ValueError("language must be an ISO 639-1 code of two ASCII letters")
        return value.lower()


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    environment variable for the seed secret.
    """

    with (
        importlib_resources.files("scrambler.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    secret_env = cfg.seed.secret_env
    if environ.get(secret_env):
        cfg.seed.secret = SecretStr(environ[secret_env])

    return cfg


__all__ = [
    "ConfigModel",
    "ContentOptions",
    "SubstitutionSettings",
    "WordlistSettings",
    "SeedSettings",
    "VerificationSettings",
    "deep_merge_dicts",
    "load_config",
]
