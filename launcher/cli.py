"""Launcher CLI using CLIApp framework."""

from __future__ import annotations

import json
import logging
import shlex
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from core.cli_errors import MissingInputError
from core.cli_framework import CLIApp

from . import __version__
from .config import Config, Executable, Shortcut, create_default_config, load_config
from .display import Display, TextDisplay, make_display
from .meta import PROG, PURPOSE
from .resolver import (
    ParamPolicy,
    build_command,
    check_supported,
    has_params,
    launch,
    split_params,
)

LOG = logging.getLogger(__name__)

app = CLIApp(
    PROG,
    PURPOSE,
    version=__version__,
    epilog="example: launcher run -e chrome -s google -p cats",
)


@dataclass
class RunRequest:
    shortcut_name: str
    shortcut: Shortcut
    executable_name: str
    executable: Executable
    params: List[str] = field(default_factory=list)


def gather_run_request(
    config: Config,
    display: Display,
    executable_name: str,
    shortcut_name: Optional[str] = None,
    params: Optional[Sequence[str]] = None,
) -> RunRequest:
    """Look up names and fill in anything missing by prompting."""
    if not shortcut_name:
        shortcut_name = display.prompt(f"[{executable_name}] Shortcut name").strip()
        if not shortcut_name:
            raise MissingInputError("a shortcut name is required")
    shortcut = config.get_shortcut(shortcut_name)
    executable = config.get_executable(executable_name)
    check_supported(shortcut, executable_name)
    values = list(params or [])
    if has_params(shortcut) and not values:
        values = split_params(display.prompt("Params for template, comma separated"))
    return RunRequest(
        shortcut_name=shortcut_name,
        shortcut=shortcut,
        executable_name=executable_name,
        executable=executable,
        params=values,
    )


# Note: @argument decorators must come BEFORE @command (decorators apply bottom-up)
@app.command("run", help="Run a shortcut with an executable")
@app.argument("-e", "--executable-name", help="The program that should execute your command template")
@app.argument("-s", "--shortcut-name", help="The name of the shortcut (prompted when omitted)")
@app.argument("-g", "--use-gui", action="store_true", help="Use GUI dialogs instead of the terminal")
@app.argument("-p", "--params", action="append", default=[], help="Template parameter (repeatable)")
@app.argument("--join-params", action="store_true", help="Join all params into one substitution instead of one per param")
@app.argument("--dry-run", action="store_true", help="Print the command instead of launching it")
def cmd_run(args) -> int:
    display = make_display(args.use_gui)
    args._report = display.error
    if not args.executable_name:
        raise MissingInputError(
            "the executable-name must be provided",
            hint="Pass -e/--executable-name",
        )
    config = load_config()
    request = gather_run_request(
        config,
        display,
        args.executable_name,
        args.shortcut_name,
        args.params,
    )
    policy = ParamPolicy.JOIN if args.join_params else ParamPolicy.EACH
    argv = build_command(request.shortcut, request.executable, request.params, policy=policy)
    if args.verbose:
        display.debug(request)
    if args.dry_run:
        display.info(shlex.join(argv))
        return 0
    pid = launch(argv)
    LOG.debug("spawned pid %s", pid)
    return 0


@app.command("init", help="Create a default configuration file")
def cmd_init(args) -> int:
    config = create_default_config()
    print(f"Default configuration file created successfully at {config.path}")
    return 0


@app.command("add", help="Add a shortcut to the configuration")
@app.argument("-s", "--shortcut-name", required=True, help="Name of the new shortcut")
@app.argument("-t", "--template", required=True, help="Template; %%s marks where params go")
@app.argument("-x", "--supported-executable", action="append", default=[], dest="supported", help="Restrict the shortcut to this executable (repeatable)")
def cmd_add(args) -> int:
    config = load_config()
    config.add_shortcut(
        args.shortcut_name,
        Shortcut(template=args.template, supported_executables=list(args.supported)),
    )
    print(f"Added shortcut '{args.shortcut_name}' to {config.path}")
    return 0


@app.command("list", help="Show configured executables and shortcuts")
@app.argument("--json", action="store_true", help="Emit JSON instead of text")
def cmd_list(args) -> int:
    config = load_config()
    if args.json:
        print(json.dumps(config.to_dict(), indent=2))
        return 0
    out = TextDisplay()
    out.info("executables:")
    for name, exe in config.executables.items():
        out.info(f"  {name}: {shlex.join(exe.command)}")
    out.info("shortcuts:")
    for name, sc in config.shortcuts.items():
        suffix = f"  [{', '.join(sc.supported_executables)}]" if sc.supported_executables else ""
        out.info(f"  {name}: {sc.template}{suffix}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the launcher CLI."""
    return app.run(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
