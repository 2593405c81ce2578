"""Turn a shortcut, an executable and parameters into a launched process."""

from __future__ import annotations

import logging
import subprocess
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from core.cli_errors import LaunchError, UnsupportedError

from .config import Executable, Shortcut

LOG = logging.getLogger(__name__)

MARKER = "%s"


class ParamPolicy(str, Enum):
    """How several parameters are applied to one template."""

    EACH = "each"  # one resolved string per parameter
    JOIN = "join"  # parameters joined, substituted once


def _template_of(shortcut: Union[Shortcut, str]) -> str:
    return shortcut if isinstance(shortcut, str) else shortcut.template


def has_params(shortcut: Union[Shortcut, str]) -> bool:
    return MARKER in _template_of(shortcut)


def split_params(raw: str) -> List[str]:
    """Split a prompted answer on commas."""
    return [part.strip() for part in raw.split(",")]


def resolve_template(
    template: str,
    params: Sequence[str],
    policy: ParamPolicy = ParamPolicy.EACH,
    joiner: str = " ",
) -> List[str]:
    """Substitute ``params`` into ``template``.

    A template without the marker is returned untouched and ``params`` are
    ignored. Replacement is literal, so other ``%`` sequences survive.
    """
    if MARKER not in template:
        return [template]
    if not params:
        return [template.replace(MARKER, "")]
    if policy is ParamPolicy.JOIN:
        return [template.replace(MARKER, joiner.join(params))]
    return [template.replace(MARKER, value) for value in params]


def check_supported(shortcut: Shortcut, executable_name: str) -> None:
    allowed = shortcut.supported_executables
    if allowed and executable_name not in allowed:
        raise UnsupportedError(
            f"the shortcut cannot be used with executable '{executable_name}'",
            hint=f"Supported executables: {', '.join(allowed)}",
        )


def build_command(
    shortcut: Shortcut,
    executable: Executable,
    params: Sequence[str] = (),
    policy: ParamPolicy = ParamPolicy.EACH,
    joiner: str = " ",
) -> List[str]:
    """Executable tokens followed by the resolved template value(s)."""
    resolved = resolve_template(shortcut.template, params, policy=policy, joiner=joiner)
    return list(executable.command) + resolved


Popen = Callable[..., "subprocess.Popen"]


def launch(argv: Sequence[str], popen: Optional[Popen] = None) -> int:
    """Spawn ``argv`` without waiting for it; return the child pid."""
    if not argv:
        raise LaunchError("nothing to launch: the command is empty")
    spawn = popen or subprocess.Popen
    LOG.debug("launching %s", list(argv))
    try:
        proc = spawn(  # noqa: S603
            list(argv),
            stdin=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        raise LaunchError(
            f"failed to launch {argv[0]}: {exc.strerror or exc}",
            hint="Check the executable's command path in the configuration.",
        ) from exc
    return proc.pid
