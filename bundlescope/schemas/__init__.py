"""Pydantic schemas for bundler stats and entry point options."""

from bundlescope.schemas.options import (
    AnalyzerOptions,
    JSONReportOptions,
    ReportOptions,
    ReportTitle,
    ServerOptions,
    SizeMetric,
)
from bundlescope.schemas.stats import BundleStats, StatsAsset, StatsChunk, StatsModule

__all__ = [
    "AnalyzerOptions",
    "BundleStats",
    "JSONReportOptions",
    "ReportOptions",
    "ReportTitle",
    "ServerOptions",
    "SizeMetric",
    "StatsAsset",
    "StatsChunk",
    "StatsModule",
]
