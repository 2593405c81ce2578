"""Config store: named executables and shortcuts backed by a YAML file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from core.cli_errors import (
    AlreadyExistsError,
    ConfigNotFoundError,
    ConfigParseError,
    NotFoundError,
)
from core.yamlio import dump_mapping, load_mapping

from .meta import APP_ID, CONFIG_ENV_VAR, CONFIG_FILENAME, PROG

LOG = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class Executable:
    command: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"command": list(self.command)}


@dataclass
class Shortcut:
    template: str
    supported_executables: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"template": self.template}
        if self.supported_executables:
            data["supportedExecutables"] = list(self.supported_executables)
        return data


def config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the config file location.

    ``DLAUNCHER_CONFIG_PATH`` wins when set and non-empty; otherwise
    ``~/.config/dlauncher/config.yaml``.
    """
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_ENV_VAR, "")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / APP_ID / CONFIG_FILENAME


def _scalar(value: Any) -> Optional[str]:
    """YAML scalar as text; None for nulls, mappings and lists."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def _parse_executable(name: str, raw: Any) -> Executable:
    if not isinstance(raw, dict):
        raise ConfigParseError(f"executable '{name}' must be a mapping with a 'command' list")
    command = raw.get("command")
    if not isinstance(command, list) or not command:
        raise ConfigParseError(f"executable '{name}' needs a non-empty 'command' list")
    tokens = [_scalar(tok) for tok in command]
    if any(tok is None for tok in tokens):
        raise ConfigParseError(f"executable '{name}' command entries must be scalars")
    return Executable(command=tokens)


def _parse_shortcut(name: str, raw: Any) -> Shortcut:
    if not isinstance(raw, dict):
        raise ConfigParseError(f"shortcut '{name}' must be a mapping with a 'template'")
    template = _scalar(raw.get("template"))
    if template is None:
        raise ConfigParseError(f"shortcut '{name}' needs a string 'template'")
    supported = raw.get("supportedExecutables") or []
    names = [_scalar(s) for s in supported] if isinstance(supported, list) else None
    if names is None or any(n is None for n in names):
        raise ConfigParseError(f"shortcut '{name}' supportedExecutables must be a list of names")
    return Shortcut(template=template, supported_executables=names)


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigParseError(f"'{key}' must be a mapping of names")
    return section


@dataclass
class Config:
    """Root aggregate loaded once per invocation and passed explicitly."""

    path: Path
    executables: Dict[str, Executable] = field(default_factory=dict)
    shortcuts: Dict[str, Shortcut] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: PathLike) -> "Config":
        executables = {
            str(name): _parse_executable(str(name), raw)
            for name, raw in _section(data, "executables").items()
        }
        shortcuts = {
            str(name): _parse_shortcut(str(name), raw)
            for name, raw in _section(data, "shortcuts").items()
        }
        return cls(path=Path(path), executables=executables, shortcuts=shortcuts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "executables": {name: exe.to_dict() for name, exe in self.executables.items()},
            "shortcuts": {name: sc.to_dict() for name, sc in self.shortcuts.items()},
        }

    def get_shortcut(self, name: str) -> Shortcut:
        try:
            return self.shortcuts[name]
        except KeyError:
            raise NotFoundError(f"the shortcut does not exist: {name}") from None

    def get_executable(self, name: str) -> Executable:
        try:
            return self.executables[name]
        except KeyError:
            raise NotFoundError(f"the executable does not exist: {name}") from None

    def add_shortcut(self, name: str, shortcut: Shortcut) -> None:
        """Insert a new shortcut and persist the whole config.

        An existing name is never overwritten; the config stays untouched.
        """
        existing = self.shortcuts.get(name)
        if existing is not None:
            raise AlreadyExistsError(
                f"shortcut named '{name}' already exists. The template is: '{existing.template}'"
            )
        self.shortcuts[name] = shortcut
        try:
            self.save()
        except Exception:
            del self.shortcuts[name]
            raise
        LOG.debug("added shortcut %s -> %s", name, shortcut.template)

    def save(self) -> None:
        dump_mapping(self.path, self.to_dict())


def load_config(path: Optional[PathLike] = None) -> Config:
    """Load the config file at ``path`` (default: ``config_path()``)."""
    target = Path(path) if path is not None else config_path()
    LOG.debug("loading config from %s", target)
    try:
        data = load_mapping(target)
    except ConfigNotFoundError as exc:
        raise ConfigNotFoundError(
            f"configuration file not found: {target}",
            hint=f"Run '{PROG} init' to create a default configuration.",
        ) from exc
    return Config.from_dict(data, target)


def default_config(path: PathLike) -> Config:
    """Starter configuration: two browsers, three shortcuts."""
    return Config(
        path=Path(path),
        executables={
            "chrome": Executable(command=["/usr/bin/google-chrome-stable", "--new-tab"]),
            "firefox": Executable(command=["/usr/bin/firefox", "--new-tab", "--url"]),
        },
        shortcuts={
            "any": Shortcut(template="%s"),
            "blank": Shortcut(template="about:blank"),
            "google": Shortcut(template="https://www.google.com/search?q=%s"),
        },
    )


def create_default_config(path: Optional[PathLike] = None) -> Config:
    """Write the starter configuration, replacing any existing file."""
    target = Path(path) if path is not None else config_path()
    config = default_config(target)
    config.save()
    LOG.debug("wrote default config to %s", target)
    return config
