"""Interaction surface: prompting and reporting through a terminal or dialogs.

``make_display`` picks one implementation at startup; callers receive it
explicitly and only talk to the ``Display`` protocol.
"""

from __future__ import annotations

import logging
import sys
from pprint import pformat
from typing import Any, NoReturn, Optional, Protocol, TextIO

from core.cli_errors import DialogError, ExitCode, MissingInputError

from .meta import APP_ID

LOG = logging.getLogger(__name__)


class Display(Protocol):
    def prompt(self, message: str) -> str:
        ...

    def info(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def debug(self, value: Any) -> None:
        ...


class TextDisplay:
    """Terminal display; prompts read one line from the input stream."""

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr

    # Resolve lazily so redirected sys streams are honoured.
    @property
    def stdin(self) -> TextIO:
        return self._stdin or sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def prompt(self, message: str) -> str:
        self.stdout.write(f"{message}: ")
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise MissingInputError(f"no input received for prompt: {message}")
        return line.rstrip("\r\n")

    def info(self, message: str) -> None:
        print(message, file=self.stdout)

    def error(self, message: str) -> None:
        print(message, file=self.stderr)

    def debug(self, value: Any) -> None:
        print(pformat(value), file=self.stdout)


class DialogDisplay:
    """Modal tkinter dialogs.

    A failed or cancelled prompt shows an error dialog and ends the process
    with ``ExitCode.DIALOG_ERROR``.
    """

    def __init__(self, title: str = APP_ID, dialogs: Any = None) -> None:
        self.title = title
        self._dialogs = dialogs

    def _toolkit(self) -> Any:
        if self._dialogs is None:
            self._dialogs = _TkDialogs()
        return self._dialogs

    def _fail(self, exc: DialogError) -> NoReturn:
        LOG.debug("dialog failure: %s", exc.message)
        try:
            self._toolkit().show_error(self.title, exc.message)
        except DialogError:
            print(f"Error: {exc.message}", file=sys.stderr)
        raise SystemExit(int(ExitCode.DIALOG_ERROR))

    def prompt(self, message: str) -> str:
        try:
            answer = self._toolkit().ask_string(self.title, message)
        except DialogError as exc:
            self._fail(exc)
        if answer is None:
            self._fail(DialogError("the dialog was cancelled"))
        return answer

    def _show(self, kind: str, message: str) -> None:
        try:
            toolkit = self._toolkit()
            if kind == "error":
                toolkit.show_error(self.title, message)
            else:
                toolkit.show_info(self.title, message)
        except DialogError as exc:
            print(message, file=sys.stderr)
            LOG.debug("falling back to stderr: %s", exc.message)

    def info(self, message: str) -> None:
        self._show("info", message)

    def error(self, message: str) -> None:
        self._show("error", message)

    def debug(self, value: Any) -> None:
        self._show("info", pformat(value))


class _TkDialogs:
    """Thin wrapper over tkinter's stock dialogs using a hidden root window."""

    def __init__(self) -> None:
        try:
            import tkinter as tk
            from tkinter import messagebox, simpledialog
        except ImportError as exc:
            raise DialogError(f"tkinter is not available: {exc}") from exc
        self._tk = tk
        self._messagebox = messagebox
        self._simpledialog = simpledialog

    def _root(self) -> Any:
        try:
            root = self._tk.Tk()
        except self._tk.TclError as exc:
            raise DialogError(f"cannot open a dialog: {exc}") from exc
        root.withdraw()
        return root

    def ask_string(self, title: str, message: str) -> Optional[str]:
        root = self._root()
        try:
            return self._simpledialog.askstring(title, message, parent=root)
        finally:
            root.destroy()

    def show_info(self, title: str, message: str) -> None:
        root = self._root()
        try:
            self._messagebox.showinfo(title, message, parent=root)
        finally:
            root.destroy()

    def show_error(self, title: str, message: str) -> None:
        root = self._root()
        try:
            self._messagebox.showerror(title, message, parent=root)
        finally:
            root.destroy()


def make_display(use_gui: bool) -> Display:
    if use_gui:
        return DialogDisplay()
    return TextDisplay()
