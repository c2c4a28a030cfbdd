"""Run configuration for a single patch invocation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, model_validator

from .applier import OverflowPolicy
from .errors import RibsError

__all__ = ["ConfigError", "PatchOptions", "load_config", "patch_defaults"]


class ConfigError(RibsError):
    """Raised when a configuration file cannot be used."""


class PatchOptions(BaseModel):
    """Everything ``run_patch`` needs to know about one invocation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    patch: Path
    base: Optional[Path] = None
    out: Optional[Path] = None
    verbose: bool = False
    overflow: OverflowPolicy = OverflowPolicy.ERROR

    @model_validator(mode="after")
    def _require_base_for_output(self) -> "PatchOptions":
        if self.out is not None and self.base is None:
            raise ValueError("an output path requires a base file")
        return self


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load YAML configuration from disk and return it as a dictionary."""
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}", details={"path": config_path.as_posix()})

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as error:
        raise ConfigError(f"Failed to parse config: {error}", details={"path": config_path.as_posix()}) from error

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping at the top level.", details={"path": config_path.as_posix()})

    return data


def patch_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Extract the ``patch`` section defaults understood by :class:`PatchOptions`."""
    section = config.get("patch") or {}
    if not isinstance(section, dict):
        raise ConfigError("The 'patch' section must be a mapping.")

    defaults: Dict[str, Any] = {}
    if "verbose" in section:
        defaults["verbose"] = bool(section["verbose"])
    if "overflow" in section:
        try:
            defaults["overflow"] = OverflowPolicy(str(section["overflow"]).strip().lower())
        except ValueError as error:
            allowed = ", ".join(policy.value for policy in OverflowPolicy)
            raise ConfigError(f"Unknown overflow policy {section['overflow']!r}; expected one of: {allowed}") from error
    return defaults
