"""Turn raw bundler stats into per-bundle size trees.

The result maps each JavaScript asset name to a tree of folders and modules:

    {"main.js": {"label": "main.js", "isAsset": True, "statSize": 1234,
                 "parsedSize": 900, "gzipSize": 310, "groups": [...]}}

``statSize`` comes from the stats file. ``parsedSize`` and ``gzipSize`` are only
present when the emitted asset can be read from ``bundle_dir``.
"""

from __future__ import annotations

import gzip
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from bundlescope.schemas.options import AnalyzerOptions
from bundlescope.schemas.stats import BundleStats, StatsAsset, StatsModule
from bundlescope.utils.asset_filter import create_assets_filter

ChartData = Dict[str, Dict[str, Any]]

JS_ASSET_RE = re.compile(r"\.(?:m|c)?js$")
CONCATENATED_SUFFIX_RE = re.compile(r" \+ \d+ modules?$")


class _Folder:
    def __init__(self, label: str, path: str):
        self.label = label
        self.path = path
        self.folders: Dict[str, _Folder] = {}
        self.files: List[Dict[str, Any]] = []

    def folder(self, label: str) -> "_Folder":
        if label not in self.folders:
            path = f"{self.path}/{label}" if self.path else label
            self.folders[label] = _Folder(label, path)
        return self.folders[label]

    def to_groups(self) -> List[Dict[str, Any]]:
        groups: List[Dict[str, Any]] = []
        for child in self.folders.values():
            child_groups = child.to_groups()
            groups.append(
                {
                    "label": child.label,
                    "path": child.path,
                    "statSize": sum(group["statSize"] for group in child_groups),
                    "groups": child_groups,
                }
            )
        groups.extend(self.files)
        return groups


def load_stats(bundle_stats: Any) -> List[BundleStats]:
    """Validate raw stats and flatten multi-compiler output into single compilations."""
    if isinstance(bundle_stats, list):
        raw_items = bundle_stats
    elif isinstance(bundle_stats, dict):
        raw_items = [bundle_stats]
    else:
        raise TypeError(
            f"Bundle stats must be a JSON object or a list of objects, got {type(bundle_stats).__name__}"
        )

    compilations: List[BundleStats] = []
    for raw in raw_items:
        compilations.extend(_flatten(BundleStats.model_validate(raw)))
    return compilations


def _flatten(stats: BundleStats) -> Iterable[BundleStats]:
    if stats.assets:
        yield stats
    for child in stats.children:
        yield from _flatten(child)


def _module_parts(name: str) -> List[str]:
    # Drop loader prefixes ("babel-loader!./src/a.js") and the concatenation marker
    resource = name.split("!")[-1]
    resource = CONCATENATED_SUFFIX_RE.sub("", resource)
    return [part for part in resource.split("/") if part and part != "."]


def _expand(module: StatsModule, chunks: List[Any]) -> Iterable[StatsModule]:
    if module.modules:
        for member in module.modules:
            if not member.chunks:
                member = member.model_copy(update={"chunks": chunks})
            yield from _expand(member, chunks)
    else:
        yield module


def _all_modules(stats: BundleStats) -> List[StatsModule]:
    if stats.modules:
        return stats.modules
    modules: List[StatsModule] = []
    for chunk in stats.chunks:
        for module in chunk.modules or []:
            if not module.chunks:
                module = module.model_copy(update={"chunks": [chunk.id]})
            modules.append(module)
    return modules


def _asset_modules(asset: StatsAsset, modules: List[StatsModule]) -> List[StatsModule]:
    asset_chunks = set(asset.chunks)
    selected: List[StatsModule] = []
    for module in modules:
        if asset_chunks.intersection(module.chunks):
            selected.extend(_expand(module, module.chunks))
    return selected


def _build_tree(asset_name: str, modules: List[StatsModule]) -> Dict[str, Any]:
    root = _Folder(asset_name, "")
    for module in modules:
        parts = _module_parts(module.name)
        if not parts:
            continue
        folder = root
        for part in parts[:-1]:
            folder = folder.folder(part)
        folder.files.append(
            {
                "id": module.id,
                "label": parts[-1],
                "path": "/".join(parts),
                "statSize": module.size,
            }
        )
    return {"label": asset_name, "isAsset": True, "groups": root.to_groups()}


def _parsed_sizes(asset_name: str, bundle_dir: Union[str, Path, None], opts: AnalyzerOptions) -> Dict[str, int]:
    if not bundle_dir:
        return {}
    asset_path = Path(bundle_dir) / asset_name
    if not asset_path.is_file():
        return {}
    try:
        content = asset_path.read_bytes()
    except OSError as exc:
        opts.logger.warning('Error parsing bundle asset "%s": %s', asset_path, exc)
        return {}
    return {
        "parsedSize": len(content),
        "gzipSize": len(gzip.compress(content, compresslevel=9)),
    }


def get_viewer_data(bundle_stats: Any, bundle_dir: Union[str, Path, None], opts: AnalyzerOptions) -> ChartData:
    """Build chart data for every JavaScript asset in ``bundle_stats``.

    Raises:
        TypeError / pydantic.ValidationError: when the stats are not shaped like bundler stats
    """
    is_kept = create_assets_filter(opts.exclude_assets)
    chart_data: ChartData = {}

    for stats in load_stats(bundle_stats):
        modules = _all_modules(stats)
        for asset in stats.assets:
            asset_name = asset.name.split("?", 1)[0]
            if not JS_ASSET_RE.search(asset_name) or not is_kept(asset_name):
                continue

            asset_modules = _asset_modules(asset, modules)
            tree = _build_tree(asset_name, asset_modules)
            if asset_modules:
                tree["statSize"] = sum(group["statSize"] for group in tree["groups"])
            else:
                tree["statSize"] = asset.size
            tree.update(_parsed_sizes(asset_name, bundle_dir, opts))
            chart_data[asset_name] = tree

    if chart_data:
        opts.logger.debug("Analyzed %s bundle(s): %s", len(chart_data), ", ".join(chart_data))
    return chart_data
