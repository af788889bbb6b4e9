from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class VerbosityLevel(str, Enum):
    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


Emitter = Callable[[str], None]


@dataclass
class WalkLogger:
    verbosity: VerbosityLevel = VerbosityLevel.QUIET
    emit: Emitter = print

    @property
    def is_verbose(self) -> bool:
        return self.verbosity is VerbosityLevel.VERBOSE

    def debug(self, message: str) -> None:
        if self.is_verbose:
            self.emit(f"[verbose] {message}")

    def info(self, message: str) -> None:
        if self.verbosity in (VerbosityLevel.NORMAL, VerbosityLevel.VERBOSE):
            self.emit(f"[info] {message}")

    def warning(self, message: str) -> None:
        # Surfaced in every mode, quiet included
        self.emit(f"[warn] {message}")

    def error(self, message: str) -> None:
        self.emit(f"[error] {message}")
