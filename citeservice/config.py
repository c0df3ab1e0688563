"""Service configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any
import json
import os
import re

import yaml


@dataclass(frozen=True)
class MarkupConfig:
    """Element and attribute names used in annotated documents."""

    marker_tag: str = "citation"
    ref_ids_attr: str = "data-ref-ids"
    rendered_attr: str = "data-rendered"
    tooltip_attr: str = "data-tooltip"
    section_tag: str = "section"
    section_id_attr: str = "data-paragraph-id"
    parser: str = "html.parser"


@dataclass(frozen=True)
class EngineConfig:
    default_locale: str = "en-US"
    supported_locale_prefixes: list[str] = field(default_factory=lambda: ["en"])
    output_format: str = "html"
    validate_style: bool = False
    default_item_type: str = "article-journal"


@dataclass(frozen=True)
class APIConfig:
    host: str = "0.0.0.0"
    port: int = 3003
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    max_body_bytes: int = 1_048_576


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class ServiceConfig:
    markup: MarkupConfig = field(default_factory=MarkupConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    api: APIConfig = field(default_factory=APIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS = {
    "markup": MarkupConfig,
    "engine": EngineConfig,
    "api": APIConfig,
    "logging": LoggingConfig,
}

_ENV_PATTERN = re.compile(r"\$\{([^:}]+):-?([^}]*)\}")


def _expand_env(value):
    """Recursively expand ${VAR:-default} in strings inside dicts/lists."""
    if isinstance(value, str):
        return _ENV_PATTERN.sub(
            lambda match: os.environ.get(match.group(1), match.group(2)), value
        )
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def _coalesce(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _coalesce(merged[key], value)
        else:
            merged[key] = value
    return merged


def _build_section(name: str, data: dict[str, Any]):
    cls = _SECTIONS[name]
    known = {f.name: f for f in fields(cls)}
    unknown = set(data) - set(known)
    if unknown:
        raise ValueError(f"Unknown {name} config keys: {', '.join(sorted(unknown))}")

    values = {}
    for key, value in data.items():
        # YAML env expansion always yields strings
        default = getattr(cls(), key)
        if isinstance(default, bool) and isinstance(value, str):
            value = value.strip().lower() in {"1", "true", "yes", "on"}
        elif isinstance(default, int) and not isinstance(default, bool) and isinstance(value, str):
            value = int(value)
        values[key] = value
    return cls(**values)


def config_from_dict(data: dict[str, Any]) -> ServiceConfig:
    """Create config from a (possibly partial) dictionary."""
    unknown = set(data) - set(_SECTIONS)
    if unknown:
        raise ValueError(f"Unknown config sections: {', '.join(sorted(unknown))}")

    merged = _coalesce(asdict(ServiceConfig()), _expand_env(data))
    return ServiceConfig(**{name: _build_section(name, merged[name]) for name in _SECTIONS})


def load_config(path: str | Path | None = None) -> ServiceConfig:
    """Load configuration from a YAML or JSON file.

    Args:
        path: Config file path. If None, defaults are used.

    Returns:
        ServiceConfig with the PORT environment override applied
    """
    data: dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        raw = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")

    config = config_from_dict(data)
    return apply_env_overrides(config)


def apply_env_overrides(config: ServiceConfig) -> ServiceConfig:
    env_port = os.getenv("PORT")
    if not env_port:
        return config

    api = APIConfig(
        host=config.api.host,
        port=int(env_port),
        cors_origins=config.api.cors_origins,
        max_body_bytes=config.api.max_body_bytes,
    )
    return ServiceConfig(
        markup=config.markup,
        engine=config.engine,
        api=api,
        logging=config.logging,
    )
