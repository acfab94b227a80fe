"""Static chunking config loader. Read-only; no business logic."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from app.config.chunking.models import ChunkingConfig
from app.services.chunking.exceptions import ConfigurationError

_config_dir = Path(__file__).resolve().parent
_config_path = _config_dir / "static.json"

_cached: dict[str, ChunkingConfig] | None = None
_active_profile: str | None = None


def _load_raw_data() -> dict:
    """Load raw JSON; used to read both profiles and active."""
    raw = _config_path.read_text(encoding="utf-8")
    return json.loads(raw)


def build_config(data: dict[str, Any]) -> ChunkingConfig:
    """Validate a config dict. Type errors surface as ConfigurationError too."""
    try:
        return ChunkingConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        field = ".".join(str(p) for p in first.get("loc", ())) or None
        raise ConfigurationError(f"Invalid chunking config: {first.get('msg', e)}", field=field) from e


def load_chunking_profiles() -> dict[str, ChunkingConfig]:
    """Load chunking profiles from static.json. Keys are profile names."""
    global _cached
    if _cached is not None:
        return _cached
    data = _load_raw_data()
    profiles = data.get("profiles", {})
    _cached = {k: build_config(v) for k, v in profiles.items()}
    return _cached


def get_chunking_config(profile_name: str) -> ChunkingConfig | None:
    """Return chunking config for the given profile, or None if missing."""
    return load_chunking_profiles().get(profile_name)


def get_active_profile_name() -> str:
    """Return the profile name marked as active in static.json. Defaults to 'default' if missing."""
    global _active_profile
    if _active_profile is not None:
        return _active_profile
    data = _load_raw_data()
    _active_profile = data.get("active", "default")
    return _active_profile


def get_active_chunking_config() -> ChunkingConfig:
    """Return the chunking config for the active profile. Uses get_active_profile_name()."""
    name = get_active_profile_name()
    cfg = get_chunking_config(name)
    if cfg is None:
        raise ConfigurationError(f"Active profile {name!r} not found in profiles")
    return cfg


def resolve_chunking_config(
    profile_name: str,
    inline_config: dict | None = None,
    overrides: dict | None = None,
) -> ChunkingConfig:
    """
    Resolve chunking config by profile name or inline config, then apply overrides.
    If inline_config is provided and non-empty, validate and use it.
    If profile_name is "active", use the profile marked as active in static.json.
    Raises ConfigurationError if the profile is missing or the result is invalid.
    """
    if inline_config:
        cfg = build_config(inline_config)
    elif profile_name == "active":
        cfg = get_active_chunking_config()
    else:
        found = get_chunking_config(profile_name)
        if found is None:
            raise ConfigurationError(f"Unknown chunking profile: {profile_name!r}", field="profile")
        cfg = found
    if overrides:
        return build_config({**cfg.model_dump(), **overrides})
    return cfg
