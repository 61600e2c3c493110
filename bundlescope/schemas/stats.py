"""Schemas for the subset of bundler stats the analyzer reads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StatsModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class StatsModule(StatsModel):
    id: int | str | None = None
    name: str = ""
    size: int = Field(default=0, ge=0)
    chunks: list[int | str] = Field(default_factory=list)
    # Concatenated modules carry their members here
    modules: list[StatsModule] | None = None


class StatsChunk(StatsModel):
    id: int | str
    names: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)
    modules: list[StatsModule] | None = None


class StatsAsset(StatsModel):
    name: str
    size: int = Field(default=0, ge=0)
    chunks: list[int | str] = Field(default_factory=list)


class BundleStats(StatsModel):
    output_path: str | None = Field(default=None, alias="outputPath")
    assets: list[StatsAsset] = Field(default_factory=list)
    chunks: list[StatsChunk] = Field(default_factory=list)
    modules: list[StatsModule] = Field(default_factory=list)
    children: list[BundleStats] = Field(default_factory=list)
