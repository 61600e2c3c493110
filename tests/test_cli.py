"""Tests for the command line entry point."""

import argparse
import json

import pytest

from bundlescope import cli
from tests.samples import empty_stats, two_bundle_stats


@pytest.fixture(autouse=True)
def keep_test_logging(monkeypatch):
    # setup_logging would stop bundlescope loggers from reaching caplog in later tests
    monkeypatch.setattr(cli, "setup_logging", lambda level=None: None)


def write_stats(tmp_path, stats):
    stats_file = tmp_path / "stats.json"
    stats_file.write_text(json.dumps(stats), encoding="utf-8")
    return stats_file


def test_parse_port():
    assert cli.parse_port("auto") == 0
    assert cli.parse_port("8080") == 8080
    with pytest.raises(argparse.ArgumentTypeError):
        cli.parse_port("http")
    with pytest.raises(argparse.ArgumentTypeError):
        cli.parse_port("70000")


def test_parser_short_flags():
    args = cli.build_parser().parse_args(
        ["stats.json", "dist", "-m", "json", "-h", "0.0.0.0", "-p", "auto", "-O", "-e", "vendor", "-e", "map"]
    )
    assert args.mode == "json"
    assert args.host == "0.0.0.0"
    assert args.port == 0
    assert args.open_browser is False
    assert args.exclude == ["vendor", "map"]
    assert args.bundle_dir == "dist"


def test_static_mode_writes_report_next_to_bundles(tmp_path):
    stats_file = write_stats(tmp_path, two_bundle_stats())

    exit_code = cli.main([str(stats_file), "-m", "static", "-r", "reports/out.html", "-O", "-t", "CI"])

    assert exit_code == 0
    html = (tmp_path / "reports" / "out.html").read_text(encoding="utf-8")
    assert "<title>CI</title>" in html


def test_json_mode_honours_exclude(tmp_path):
    stats_file = write_stats(tmp_path, two_bundle_stats())
    target = tmp_path / "report.json"

    exit_code = cli.main([str(stats_file), "-m", "json", "-r", str(target), "-e", r"^b\.js$"])

    assert exit_code == 0
    assert list(json.loads(target.read_text(encoding="utf-8"))) == ["a.js"]


def test_missing_stats_file_fails(tmp_path):
    assert cli.main([str(tmp_path / "absent.json"), "-m", "json"]) == 1


def test_stats_without_bundles_fails_without_output(tmp_path):
    stats_file = write_stats(tmp_path, empty_stats())
    target = tmp_path / "report.json"

    assert cli.main([str(stats_file), "-m", "json", "-r", str(target)]) == 1
    assert not target.exists()
