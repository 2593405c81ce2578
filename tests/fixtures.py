"""Shared test fixtures and utilities.

This module provides common fakes, stubs, and helpers to simplify testing
across the launcher test suite.
"""

from __future__ import annotations

import io
import os
import subprocess
import tempfile
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence
from unittest.mock import patch

import yaml

from launcher.meta import CONFIG_ENV_VAR

REPO_ROOT = Path(__file__).resolve().parents[1]


# -----------------------------------------------------------------------------
# Path helpers
# -----------------------------------------------------------------------------


def repo_root() -> Path:
    return REPO_ROOT


def bin_path(name: str) -> Path:
    return REPO_ROOT / "bin" / name


def run(cmd: Sequence[str], cwd: Optional[str] = None, env: Optional[Dict[str, str]] = None):
    return subprocess.run(cmd, cwd=cwd, env=env, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)  # noqa: S603


# -----------------------------------------------------------------------------
# YAML config helpers
# -----------------------------------------------------------------------------

SAMPLE_CONFIG: Dict[str, Any] = {
    "executables": {
        "chrome": {"command": ["/usr/bin/google-chrome-stable", "--new-tab"]},
        "firefox": {"command": ["/usr/bin/firefox", "--new-tab", "--url"]},
    },
    "shortcuts": {
        "any": {"template": "%s"},
        "blank": {"template": "about:blank"},
        "google": {"template": "https://www.google.com/search?q=%s"},
        "ffonly": {"template": "https://example.org/%s", "supportedExecutables": ["firefox"]},
    },
}


def write_yaml(data: dict, dir: Optional[str] = None, filename: str = "config.yaml") -> str:
    td = dir or tempfile.mkdtemp()
    p = os.path.join(td, filename)
    with open(p, "w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False)
    return p


@contextmanager
def config_env(data: Optional[dict] = None) -> Iterator[Path]:
    """Point DLAUNCHER_CONFIG_PATH at a temp file; write ``data`` when given."""
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "dlauncher" / "config.yaml"
        if data is not None:
            path.parent.mkdir(parents=True)
            write_yaml(data, dir=str(path.parent))
        with patch.dict(os.environ, {CONFIG_ENV_VAR: str(path)}):
            yield path


# -----------------------------------------------------------------------------
# Output capture helpers
# -----------------------------------------------------------------------------


@contextmanager
def capture_stdout():
    """Context manager that captures stdout and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


@contextmanager
def capture_output():
    """Capture stdout and stderr; yields (out, err) buffers."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        yield out, err


# -----------------------------------------------------------------------------
# Fakes
# -----------------------------------------------------------------------------


@dataclass
class FakeProcess:
    pid: int = 4242


@dataclass
class FakePopen:
    """Records spawn calls instead of starting processes."""

    error: Optional[OSError] = None
    calls: List[List[str]] = field(default_factory=list)
    kwargs: List[Dict[str, Any]] = field(default_factory=list)

    def __call__(self, argv, **kwargs):
        if self.error is not None:
            raise self.error
        self.calls.append(list(argv))
        self.kwargs.append(kwargs)
        return FakeProcess()


@dataclass
class ScriptedDisplay:
    """Display that answers prompts from a fixed list and records output."""

    answers: List[str] = field(default_factory=list)
    prompts: List[str] = field(default_factory=list)
    infos: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    debugs: List[Any] = field(default_factory=list)

    def prompt(self, message: str) -> str:
        self.prompts.append(message)
        return self.answers.pop(0)

    def info(self, message: str) -> None:
        self.infos.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def debug(self, value: Any) -> None:
        self.debugs.append(value)
