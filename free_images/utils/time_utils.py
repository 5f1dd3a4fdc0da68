"""
Timestamp parsing for provider responses.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)

# Returned for values that cannot be parsed; no real upload predates 1970
INVALID_TIMESTAMP = -1


def parse_timestamp(value: Optional[str]) -> int:
    """Convert an ISO-8601 datetime string to epoch seconds.

    Accepts a trailing ``Z`` or an explicit offset; naive values are taken
    as UTC. Anything unparsable yields ``INVALID_TIMESTAMP``.

    Example:
        >>> parse_timestamp("2019-03-01T12:00:00Z")
        1551441600
    """
    if not value or not isinstance(value, str):
        return INVALID_TIMESTAMP

    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparsable timestamp: %r", value)
        return INVALID_TIMESTAMP

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())
