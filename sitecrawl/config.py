# === FILE: sitecrawl/config.py ===
"""
Loading and validation of the SiteCrawl configuration.
Pydantic describes the schema; YAML and JSON files may supply any field,
explicit command-line values override them.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
)

from sitecrawl import __version__
from sitecrawl.exceptions import ConfigError

__all__ = ["CrawlConfig", "load_config", "build_config"]

TerminationMode = Literal["idle", "exact"]


class CrawlConfig(BaseModel):
    """Configuration of a single crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: HttpUrl = Field(..., description="URL the crawl starts from; its host bounds the crawl.")
    concurrency: int = Field(6, ge=1, description="Max simultaneous fetches.")
    timeout: float = Field(
        5.0,
        gt=0,
        description="Per-request deadline and idle-channel threshold (seconds).",
    )
    termination: TerminationMode = Field(
        "idle", description="'idle' stops on a receive timeout, 'exact' when no work is in flight."
    )
    channel_capacity: int = Field(1000, ge=1, description="Capacity of the URL and page channels.")
    user_agent: str = Field(f"SiteCrawl/{__version__}", min_length=1, description="User-Agent header.")
    skip_extensions: Tuple[str, ...] = Field(
        (".pdf", ".mp3"), description="Links whose path ends with one of these are never followed."
    )

    @field_validator("skip_extensions", mode="before")
    def _lower_extensions(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple)):
            return tuple(str(ext).lower() for ext in v)
        return v


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML or JSON config file and return its raw mapping.
    Raises FileNotFoundError when the file is missing and ConfigError on bad content.
    """
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ConfigError(f"Unsupported config format: {suffix}")


def build_config(file_data: Optional[Dict[str, Any]] = None, **overrides: Any) -> CrawlConfig:
    """
    Merge file values with explicit overrides (None means "not given") and validate.
    Any validation failure is reported as ConfigError.
    """
    data: Dict[str, Any] = dict(file_data or {})
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return CrawlConfig(**data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
