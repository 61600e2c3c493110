"""Build the asset predicate used to drop excluded bundles from a report."""

import re
from typing import Any, Callable, List

AssetFilter = Callable[[str], bool]


def _to_matcher(pattern: Any) -> Callable[[str], bool]:
    if isinstance(pattern, str):
        regex = re.compile(pattern)
        return lambda name: regex.search(name) is not None
    if isinstance(pattern, re.Pattern):
        return lambda name: pattern.search(name) is not None
    if callable(pattern):
        return lambda name: bool(pattern(name))
    raise TypeError(
        "exclude_assets must be a regex string, a compiled pattern, a callable, "
        f"or a list of those (got {type(pattern).__name__})"
    )


def create_assets_filter(exclude: Any) -> AssetFilter:
    """Return a predicate that is True for assets that should stay in the report.

    Args:
        exclude: None, a regex string, a compiled pattern, a callable taking the
            asset name, or a list mixing any of these

    Returns:
        Predicate over asset names
    """
    if exclude is None:
        return lambda name: True

    patterns: List[Any] = list(exclude) if isinstance(exclude, (list, tuple)) else [exclude]
    matchers = [_to_matcher(pattern) for pattern in patterns]
    return lambda name: not any(matcher(name) for matcher in matchers)
