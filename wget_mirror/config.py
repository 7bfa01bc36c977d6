# === FILE: wget_mirror/config.py ===
"""
Loading and validation of wget_mirror run settings.
A Pydantic model describes the schema; optional YAML/JSON files supply tuning
knobs and logging settings while the start URL and destination usually come
from the command line.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from wget_mirror.logger import DEFAULT_FORMAT
from wget_mirror.utils import parse_start_url


class MirrorConfig(BaseModel):
    """Settings for one mirror run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: str = Field(..., description="Root URL; defines scheme, host and path scope.")
    destination: Path = Field(..., description="Flat directory receiving one file per page.")
    max_concurrency: Optional[int] = Field(None, ge=1, description="Cap on simultaneous fetches (None = unbounded).")
    timeout: Optional[float] = Field(None, gt=0, description="Total timeout per request in seconds (None = none).")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field("INFO", description="Logging level.")
    log_file: Optional[Path] = Field(None, description="Log file (stdout only when None).")
    log_format: str = Field(DEFAULT_FORMAT, min_length=1, description="Format string for log records.")

    @field_validator("log_level", mode="before")
    def _upper_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("start_url", mode="before")
    def _check_start_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_start_url(v)
        return v


_DEFAULT_CFG = Path("configs/wget_mirror.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path, None]) -> dict[str, Any]:
    """
    Read a YAML or JSON mapping. With *path* None the default file is used
    when present, otherwise an empty mapping is returned.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return {}
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> MirrorConfig:
    """
    Build a validated MirrorConfig from the file at *path* plus *overrides*.
    Overrides whose value is None are ignored so unset CLI options keep file values.
    """
    data = read_config_file(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return MirrorConfig(**data)
