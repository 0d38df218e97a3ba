"""Structured logging for itinerary mutations and map/photo events."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredEventLogger:
    """Structured logger; payload travels in ``extra["structured"]``."""

    def __init__(self, name: str = __name__) -> None:
        self._logger = logging.getLogger(name)

    def log_mutation(
        self,
        op: str,
        trip_id: str | None,
        outcome: str,
        **fields: Any,
    ) -> None:
        """Log one repository mutation."""
        log_data: dict[str, Any] = {"op": op, "trip_id": trip_id, "outcome": outcome}
        log_data.update(fields)

        log_msg = f"Itinerary mutation: {op} - {outcome}"

        if outcome == "ok":
            self._logger.info(log_msg, extra={"structured": log_data})
        else:
            self._logger.warning(log_msg, extra={"structured": log_data})

    def log_event(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        """Log a non-mutation event (geocode fallback, stale result, conversion failure)."""
        log_data: dict[str, Any] = {"event": event}
        log_data.update(fields)
        self._logger.log(level, event, extra={"structured": log_data})
