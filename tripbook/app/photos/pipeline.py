"""Photo attachment pipeline - selected files to activity photo references."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from tripbook.app.adapters.files import ImageFile, to_data_url
from tripbook.app.errors import EntityNotFound, FileConversionFailure
from tripbook.app.itinerary.repository import ItineraryRepository
from tripbook.app.utils.logging import StructuredEventLogger
from tripbook.app.utils.metrics import PrometheusTripMetrics, metrics as default_metrics

logger = logging.getLogger(__name__)


@dataclass
class PhotoFailure:
    """One file of a batch that did not attach."""

    file_name: str
    reason: str


@dataclass
class PhotoBatchResult:
    """Outcome of one attach batch, in completion order."""

    attached: list[str] = field(default_factory=list)
    failures: list[PhotoFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class PhotoAttachmentPipeline:
    """Converts a batch of files concurrently and appends each on completion.

    Every completion issues its own ``add_photo`` against the repository's
    current state, so completions in any order all land. A failing file is
    recorded and never cancels its siblings.
    """

    def __init__(
        self,
        repository: ItineraryRepository,
        max_bytes: int | None = None,
        metrics: PrometheusTripMetrics | None = None,
    ) -> None:
        self._repository = repository
        self._max_bytes = max_bytes
        self._metrics = metrics or default_metrics
        self._events = StructuredEventLogger(__name__)

    async def attach(
        self, trip_id: str, item_id: str, files: Sequence[ImageFile]
    ) -> PhotoBatchResult:
        """Attach every file to one activity.

        Args:
            trip_id: Trip holding the activity
            item_id: Target activity
            files: Selected files (may be empty)

        Returns:
            References attached and per-file failures
        """
        result = PhotoBatchResult()
        if not files:
            return result

        await asyncio.gather(*(self._attach_one(trip_id, item_id, f, result) for f in files))

        logger.info(
            "Photo batch for %s: %d attached, %d failed",
            item_id,
            len(result.attached),
            len(result.failures),
        )
        return result

    async def _attach_one(
        self, trip_id: str, item_id: str, file: ImageFile, result: PhotoBatchResult
    ) -> None:
        try:
            ref = await to_data_url(file, self._max_bytes)
        except FileConversionFailure as exc:
            self._fail(result, file.name, exc.reason, "conversion_failed")
            return

        try:
            self._repository.add_photo(trip_id, item_id, ref)
        except EntityNotFound as exc:
            self._fail(result, file.name, str(exc), "target_missing")
            return
        except Exception as exc:
            # the repository already rolled back; report and keep the batch going
            self._fail(result, file.name, f"not saved: {exc}", "persist_failed")
            return

        self._metrics.inc_photo_conversion("ok")
        result.attached.append(ref)

    def _fail(self, result: PhotoBatchResult, file_name: str, reason: str, outcome: str) -> None:
        self._metrics.inc_photo_conversion(outcome)
        self._events.log_event(
            "photo_attach_failed", logging.WARNING, file=file_name, reason=reason, outcome=outcome
        )
        result.failures.append(PhotoFailure(file_name=file_name, reason=reason))
