"""Configuration model for the command line harness."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

REPORT_FORMATS = ("terminal", "json")


@dataclass(frozen=True)
class HarnessConfig:
    modules: Tuple[str, ...] = field(default_factory=tuple)
    report: str = "terminal"
    report_path: Optional[str] = None
    color: bool = True
    verbose: bool = False
    source: Optional[Path] = None

    def merged(
        self,
        *,
        modules: Tuple[str, ...] = (),
        report: Optional[str] = None,
        report_path: Optional[str] = None,
        color: Optional[bool] = None,
        verbose: Optional[bool] = None,
    ) -> "HarnessConfig":
        """Return a copy with command line values layered on top."""

        return replace(
            self,
            modules=self.modules + tuple(item for item in modules if item not in self.modules),
            report=report or self.report,
            report_path=report_path or self.report_path,
            color=self.color if color is None else color,
            verbose=self.verbose if verbose is None else verbose,
        )
