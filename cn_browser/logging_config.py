from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

ENV_LOG_FORMAT = "CN_BROWSER_LOG_FORMAT"
ENV_LOG_LEVEL = "CN_BROWSER_LOG_LEVEL"

_PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
_JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(threadName)s %(message)s"


def _make_formatter(format_mode: str) -> logging.Formatter:
    if format_mode == "plain":
        return logging.Formatter(_PLAIN_FORMAT)
    # threadName separates the background table load from callback threads
    return jsonlogger.JsonFormatter(_JSON_FIELDS, rename_fields={"levelname": "level"})


def configure_logging(
        level: Union[int, str, None] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Route everything through one stderr handler on the root logger.

    Output is JSON lines unless "plain" is requested, either via
    force_format or CN_BROWSER_LOG_FORMAT. The level comes from the
    argument, then CN_BROWSER_LOG_LEVEL, then INFO. Calling it again
    replaces the handler instead of stacking a second one.
    """
    format_mode = (force_format or os.getenv(ENV_LOG_FORMAT, "json")).lower()
    if level is None:
        level = os.getenv(ENV_LOG_LEVEL, "INFO").upper()

    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler()
    handler.setFormatter(_make_formatter(format_mode))

    root.handlers.clear()
    root.addHandler(handler)
