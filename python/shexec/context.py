"""CLI run context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

MODE_PARSE = "parse"
MODE_RUN = "run"
MODE_INHERIT = "inherit"


@dataclass
class CliContext:
    """Options shared by the CLI helpers."""

    json_output: bool = False
    strict: bool = False
    mode: str = MODE_PARSE
    encoding: Optional[str] = None
    timeout: Optional[float] = None

    @property
    def executes(self) -> bool:
        return self.mode in (MODE_RUN, MODE_INHERIT)
