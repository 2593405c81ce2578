"""YAML read/write helpers for the launcher configuration."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .cli_errors import ConfigIOError, ConfigNotFoundError, ConfigParseError

__all__ = ["load_mapping", "dump_mapping"]

PathLike = Union[str, Path]


def load_mapping(path: PathLike) -> Dict[str, Any]:
    """Load a YAML file whose root must be a mapping.

    An empty file (or a bare YAML null) yields ``{}``. A missing file raises
    ``ConfigNotFoundError``; malformed YAML or a non-mapping root raises
    ``ConfigParseError``.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigNotFoundError(f"configuration file not found: {p}") from exc
    except OSError as exc:
        raise ConfigIOError(f"cannot read {p}: {exc.strerror or exc}") from exc
    if not text.strip():
        return {}
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigParseError(f"invalid YAML in {p}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"expected a mapping at the top of {p}, got {type(data).__name__}"
        )
    return data


def dump_mapping(path: PathLike, data: Dict[str, Any]) -> None:
    """Write a dict to YAML with stable ordering for humans.

    Parent directories are created. The content goes to a temporary file in
    the target directory which is then renamed over the target, so readers
    never observe a half-written file.
    """
    target = Path(path)
    text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, target)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError as exc:
        raise ConfigIOError(f"cannot write {target}: {exc.strerror or exc}") from exc
