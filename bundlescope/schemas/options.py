"""Option schemas for the three report entry points."""

import logging
from pathlib import Path
from typing import Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from bundlescope.logging_config import get_logger

SizeMetric = Literal["stat", "parsed", "gzip"]
ReportTitle = Union[str, Callable[[], str], None]


def _default_logger() -> logging.Logger:
    return get_logger("viewer")


class AnalyzerOptions(BaseModel):
    """Inputs shared by every analysis call; fixed for the lifetime of one acquisition."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    logger: logging.Logger = Field(default_factory=_default_logger)
    exclude_assets: Any = None


class ViewerOptions(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    bundle_dir: Optional[Path] = None
    logger: logging.Logger = Field(default_factory=_default_logger)
    exclude_assets: Any = None
    analyzer: Optional[Callable[..., Any]] = None

    def analyzer_options(self) -> AnalyzerOptions:
        return AnalyzerOptions(logger=self.logger, exclude_assets=self.exclude_assets)


class ServerOptions(ViewerOptions):
    port: int = Field(default=8888, ge=0, le=65535)
    host: str = Field(default="127.0.0.1", min_length=1)
    open_browser: bool = True
    default_sizes: SizeMetric = "parsed"
    report_title: ReportTitle = None


class ReportOptions(ViewerOptions):
    report_filename: Path
    open_browser: bool = True
    default_sizes: SizeMetric = "parsed"
    report_title: ReportTitle = None


class JSONReportOptions(ViewerOptions):
    report_filename: Path
