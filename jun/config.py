"""Environment-driven defaults.

- ``JUN_DIALECT``: dialect used when none is given (default ``jun-1.1``).
- ``JUN_MAX_DEPTH``: maximum tree depth accepted by the codec (default 500).

Values are read on every call so that tests and long-running services pick
up changes without re-importing. Explicit arguments always win.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_DIALECT = "jun-1.1"
DEFAULT_MAX_DEPTH = 500


def default_dialect_name() -> str:
    return os.environ.get("JUN_DIALECT", "").strip() or DEFAULT_DIALECT


def default_max_depth() -> int:
    raw = os.environ.get("JUN_MAX_DEPTH", "").strip()
    if not raw:
        return DEFAULT_MAX_DEPTH
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        logger.warning(
            "Ignoring JUN_MAX_DEPTH=%r (expected a positive integer), using %d",
            raw,
            DEFAULT_MAX_DEPTH,
        )
        return DEFAULT_MAX_DEPTH
    return value
