"""Best-effort browser launching."""

import logging
import webbrowser


def open_browser(url: str, logger: logging.Logger) -> None:
    """Open ``url`` in the default browser; failures are logged, never raised."""
    try:
        if not webbrowser.open(url):
            logger.debug('No browser available to open "%s"', url)
    except Exception as exc:
        logger.debug('Opener failed to open "%s":\n%s', url, exc)
