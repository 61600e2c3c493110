"""Tests for turning bundler stats into size trees."""

import pytest
from pydantic import ValidationError

from bundlescope.schemas.options import AnalyzerOptions
from bundlescope.services.analyzer import get_viewer_data, load_stats
from tests.samples import make_logger, two_bundle_stats


def analyzer_opts(**overrides):
    return AnalyzerOptions(logger=make_logger(), **overrides)


def test_js_assets_become_bundles():
    chart_data = get_viewer_data(two_bundle_stats(), None, analyzer_opts())

    assert list(chart_data) == ["a.js", "b.js"]
    assert chart_data["a.js"]["statSize"] == 100
    assert chart_data["b.js"]["statSize"] == 200
    assert chart_data["a.js"]["isAsset"] is True


def test_module_paths_are_grouped_into_folders():
    chart_data = get_viewer_data(two_bundle_stats(), None, analyzer_opts())

    groups = {group["label"]: group for group in chart_data["b.js"]["groups"]}
    assert set(groups) == {"src", "node_modules"}
    assert groups["src"]["statSize"] == 150
    lib = groups["src"]["groups"][0]
    assert lib["label"] == "lib"
    assert lib["path"] == "src/lib"
    assert lib["groups"][0] == {"id": 2, "label": "b.js", "path": "src/lib/b.js", "statSize": 150}


def test_parsed_and_gzip_sizes_need_bundle_dir(tmp_path):
    (tmp_path / "a.js").write_bytes(b"console.log(1);" * 20)

    without_dir = get_viewer_data(two_bundle_stats(), None, analyzer_opts())
    with_dir = get_viewer_data(two_bundle_stats(), tmp_path, analyzer_opts())

    assert "parsedSize" not in without_dir["a.js"]
    assert with_dir["a.js"]["parsedSize"] == 300
    assert 0 < with_dir["a.js"]["gzipSize"] < 300
    # b.js was never written to disk
    assert "parsedSize" not in with_dir["b.js"]


def test_exclude_assets_drops_matching_bundles():
    chart_data = get_viewer_data(two_bundle_stats(), None, analyzer_opts(exclude_assets=r"^b\."))
    assert list(chart_data) == ["a.js"]


def test_concatenated_modules_are_expanded():
    stats = {
        "assets": [{"name": "main.js", "size": 30, "chunks": [0]}],
        "modules": [
            {
                "name": "./src/entry.js + 1 modules",
                "size": 30,
                "chunks": [0],
                "modules": [
                    {"name": "./src/entry.js", "size": 10},
                    {"name": "babel-loader!./src/util.js", "size": 20},
                ],
            }
        ],
    }
    chart_data = get_viewer_data(stats, None, analyzer_opts())

    src = chart_data["main.js"]["groups"][0]
    assert [leaf["label"] for leaf in src["groups"]] == ["entry.js", "util.js"]
    assert chart_data["main.js"]["statSize"] == 30


def test_modules_can_come_from_chunks():
    stats = {
        "assets": [{"name": "m.mjs?v=3", "size": 9, "chunks": [0]}],
        "chunks": [{"id": 0, "modules": [{"name": "./x.js", "size": 5}]}],
    }
    chart_data = get_viewer_data(stats, None, analyzer_opts())
    assert chart_data["m.mjs"]["statSize"] == 5


def test_asset_without_modules_uses_reported_size():
    stats = {"assets": [{"name": "vendor.js", "size": 512, "chunks": [4]}]}
    chart_data = get_viewer_data(stats, None, analyzer_opts())
    assert chart_data["vendor.js"]["statSize"] == 512
    assert chart_data["vendor.js"]["groups"] == []


def test_multi_compiler_stats_are_flattened():
    child_a = {"assets": [{"name": "client.js", "size": 1, "chunks": [0]}]}
    child_b = {"assets": [{"name": "server.js", "size": 2, "chunks": [0]}]}

    assert len(load_stats({"children": [child_a, child_b]})) == 2
    chart_data = get_viewer_data([child_a, child_b], None, analyzer_opts())
    assert list(chart_data) == ["client.js", "server.js"]


def test_no_js_assets_gives_empty_result():
    stats = {"assets": [{"name": "index.html", "size": 10}]}
    assert get_viewer_data(stats, None, analyzer_opts()) == {}


def test_malformed_stats_raise():
    with pytest.raises(ValidationError):
        get_viewer_data({"assets": "nope"}, None, analyzer_opts())
    with pytest.raises(TypeError):
        get_viewer_data("stats.json", None, analyzer_opts())
