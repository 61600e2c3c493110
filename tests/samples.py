"""Sample bundler stats shared by the test modules."""

import logging


def two_bundle_stats():
    return {
        "outputPath": "/build/dist",
        "assets": [
            {"name": "a.js", "size": 100, "chunks": [0]},
            {"name": "b.js", "size": 200, "chunks": [1]},
            {"name": "styles.css", "size": 40, "chunks": [0]},
        ],
        "modules": [
            {"id": 1, "name": "./src/a.js", "size": 100, "chunks": [0]},
            {"id": 2, "name": "./src/lib/b.js", "size": 150, "chunks": [1]},
            {"id": 3, "name": "./node_modules/dep/index.js", "size": 50, "chunks": [1]},
        ],
    }


def updated_stats():
    return {
        "assets": [{"name": "c.js", "size": 300, "chunks": ["main"]}],
        "modules": [{"id": "x", "name": "./src/c.js", "size": 300, "chunks": ["main"]}],
    }


def empty_stats():
    return {"assets": [{"name": "index.html", "size": 10, "chunks": []}], "modules": []}


def malformed_stats():
    return {"assets": "not-a-list"}


def make_logger():
    # Propagates to the root logger so caplog sees it
    return logging.getLogger("tests.viewer")
