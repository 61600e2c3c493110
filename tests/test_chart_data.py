"""Tests for chart data acquisition and its failure normalization."""

import logging

from bundlescope.schemas.options import AnalyzerOptions
from bundlescope.services.chart_data import (
    ANALYSIS_FAILED_MESSAGE,
    NO_BUNDLES_MESSAGE,
    get_chart_data,
)
from tests.samples import empty_stats, make_logger, malformed_stats, two_bundle_stats


def analyzer_opts():
    return AnalyzerOptions(logger=make_logger())


def test_valid_stats_pass_through():
    chart_data = get_chart_data(analyzer_opts(), two_bundle_stats(), None)
    assert set(chart_data) == {"a.js", "b.js"}


def test_analyzer_failure_returns_none_and_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="tests.viewer")

    assert get_chart_data(analyzer_opts(), malformed_stats(), None) is None

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    debug = [r for r in caplog.records if r.levelno == logging.DEBUG]
    assert len(errors) == 1
    assert errors[0].getMessage().startswith(ANALYSIS_FAILED_MESSAGE)
    assert any("Traceback" in r.getMessage() for r in debug)


def test_empty_result_returns_none_with_distinct_message(caplog):
    caplog.set_level(logging.DEBUG, logger="tests.viewer")

    assert get_chart_data(analyzer_opts(), empty_stats(), None) is None

    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert errors == [NO_BUNDLES_MESSAGE]


def test_custom_analyzer_receives_inputs_unchanged():
    calls = []
    raw = {"anything": True}

    def analyzer(bundle_stats, bundle_dir, opts):
        calls.append((bundle_stats, bundle_dir, opts))
        return {"x.js": {"statSize": 1}}

    opts = analyzer_opts()
    result = get_chart_data(opts, raw, "/dist", analyzer=analyzer)

    assert result == {"x.js": {"statSize": 1}}
    assert calls == [(raw, "/dist", opts)]


def test_analyzer_returning_none_is_absent():
    assert get_chart_data(analyzer_opts(), {}, None, analyzer=lambda *args: None) is None


def test_empty_list_is_not_treated_as_absent():
    assert get_chart_data(analyzer_opts(), {}, None, analyzer=lambda *args: []) == []
