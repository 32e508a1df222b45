"""Runtime settings for the command line front end."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .common.field import FIELD_PRIME
from .errors import ParameterError
from .storage import DEFAULT_SHARE_SUFFIX

ENV_PREFIX = "SECRET_SHARER_"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SharingConfig:
    """
    Settings shared by the encode and decode commands.
    share_suffix: inserted between the secret file name and the share label
    seed: fixes the coefficient generator (reproducible shares, tests only)
    threshold: number of shares decoding must consume, None to use all
    log_level: level name for the package logger (DEBUG .. CRITICAL)
    log_file: rotating log file path, None to log to the console only
    """

    share_suffix: str = DEFAULT_SHARE_SUFFIX
    seed: Optional[int] = None
    threshold: Optional[int] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def validate(self) -> "SharingConfig":
        if not self.share_suffix:
            raise ParameterError("share_suffix must not be empty.")
        if self.threshold is not None and not (1 <= self.threshold < FIELD_PRIME):
            raise ParameterError(
                f"threshold must lie in [1, {FIELD_PRIME}), got {self.threshold}."
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ParameterError(f"Unknown log level {self.log_level!r}.")
        return self

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "SharingConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise ParameterError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**dict(raw)).validate()

    @classmethod
    def from_json(cls, path: str | Path) -> "SharingConfig":
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ParameterError(f"Failed to load config {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ParameterError(f"Config {path} must contain a JSON object.")
        return cls.from_dict(raw)

    def merge_env(self, environ: Mapping[str, str] | None = None) -> "SharingConfig":
        """Overlay ``SECRET_SHARER_*`` environment variables on this config."""
        env = os.environ if environ is None else environ
        merged: Dict[str, Any] = asdict(self)
        for name in merged:
            key = ENV_PREFIX + name.upper()
            if key not in env:
                continue
            value = env[key]
            if name in ("seed", "threshold"):
                try:
                    merged[name] = int(value) if value else None
                except ValueError as exc:
                    raise ParameterError(f"{key} must be an integer, got {value!r}.") from exc
            elif name == "log_file":
                merged[name] = value or None
            else:
                merged[name] = value
        return SharingConfig(**merged).validate()

    def override(self, **changes: Any) -> "SharingConfig":
        """Copy with every non-None keyword applied."""
        merged = asdict(self)
        merged.update({k: v for k, v in changes.items() if v is not None})
        return SharingConfig(**merged).validate()


def load_config(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> SharingConfig:
    """Defaults, then the JSON file (if any), then the environment."""
    base = SharingConfig.from_json(path) if path else SharingConfig()
    return base.merge_env(environ)


__all__ = ["ENV_PREFIX", "SharingConfig", "load_config"]
