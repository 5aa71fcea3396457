"""Menu provider backed by the ``gum`` command line tool."""

from __future__ import annotations

import shutil
import subprocess
from typing import Sequence

from typr.menu.base import Menu, MenuUnavailableError

GUM_URL = "https://github.com/charmbracelet/gum"


def gum_available() -> bool:
    return shutil.which("gum") is not None


class GumMenu(Menu):
    def __init__(self, executable: str = "gum"):
        self.executable = executable

    def _run(self, *args: str, capture: bool = True) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [self.executable, *args],
                stdout=subprocess.PIPE if capture else None,
                text=True,
            )
        except FileNotFoundError as e:
            raise MenuUnavailableError(f"'{self.executable}' is not installed ({GUM_URL}).") from e

    def _header(self, header: str) -> None:
        self._run(
            "style",
            "--foreground", "#36AA92",
            "--border", "rounded",
            "--border-foreground", "#E7AFF6",
            "--padding", "0 2",
            "--margin", "0 0 1 0",
            "--align", "center",
            "--width", "50",
            header,
            capture=False,
        )

    def choose(self, header: str, options: Sequence[str]) -> str:
        self._header(header)
        proc = self._run(
            "choose",
            "--item.foreground", "240",
            "--selected.foreground", "255",
            "--cursor.foreground", "#07CE41",
            "--header", header,
            *options,
        )
        return (proc.stdout or "").strip()

    def input(self, header: str, placeholder: str, value: str) -> str:
        proc = self._run(
            "input",
            "--header", header,
            "--placeholder", placeholder,
            "--value", value,
        )
        return (proc.stdout or "").strip()

    def confirm(self, prompt: str) -> bool:
        return self._run("confirm", prompt, capture=False).returncode == 0

    def style(self, text: str) -> None:
        self._run(
            "style",
            "--border", "double",
            "--margin", "1 1",
            "--padding", "1 2",
            "--border-foreground", "212",
            text,
            capture=False,
        )

    def pause(self) -> None:
        self._run("format", "Press Enter...", capture=False)
        input()
