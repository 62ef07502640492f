from __future__ import annotations

from dataclasses import dataclass
import os
import sys
from typing import Mapping, TextIO

from .config import COLOR_ALWAYS, COLOR_NEVER, validate_color_mode

NO_COLOR_ENV = "NO_COLOR"

ANSI_RESET = "\x1b[0m"
STYLE_TITLE = "1;34"
STYLE_LABEL = "36"
STYLE_VALUE = "97"
STYLE_SECONDARY = "2"
STYLE_BOLD = "1"


def detect_color(
    mode: str,
    *,
    environ: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
) -> bool:
    normalized = validate_color_mode(mode)
    if normalized == COLOR_NEVER:
        return False
    if normalized == COLOR_ALWAYS:
        return True

    environ = os.environ if environ is None else environ
    if environ.get(NO_COLOR_ENV, ""):
        return False
    stream = sys.stdout if stream is None else stream
    return _is_terminal(stream)


def _is_terminal(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


@dataclass(frozen=True)
class Theme:
    enabled: bool = False

    def style(self, code: str, text: str) -> str:
        if not self.enabled or not text:
            return text
        return f"\x1b[{code}m{text}{ANSI_RESET}"

    def title(self, text: str) -> str:
        return self.style(STYLE_TITLE, text)

    def label(self, text: str) -> str:
        return self.style(STYLE_LABEL, text)

    def value(self, text: str) -> str:
        return self.style(STYLE_VALUE, text)

    def secondary(self, text: str) -> str:
        return self.style(STYLE_SECONDARY, text)

    def bold(self, text: str) -> str:
        return self.style(STYLE_BOLD, text)
