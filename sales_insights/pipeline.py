"""End-to-end processing of one uploaded file.

``run_pipeline`` is all-or-nothing: it either returns an
:class:`AnalysisResult` or raises the first :class:`SalesDataError` met.
``UploadSlot`` decides which upload is allowed to publish its result.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .columns import ColumnMapping, resolve_columns
from .data_loader import load_raw_table
from .errors import EmptyOrInsufficientData, NoValidRecords
from .insights import Insights, generate_insights
from .normalizer import SalesRecord, normalize_records
from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    records: Tuple[SalesRecord, ...]
    insights: Insights
    mapping: ColumnMapping
    filename: str = ""


def run_pipeline(filename: str, payload: bytes, settings: Optional[Settings] = None) -> AnalysisResult:
    """Decode, resolve, normalise and aggregate ``payload``."""

    settings = settings or Settings()
    table = load_raw_table(filename, payload, settings.extensions)
    if table.row_count < 2:
        raise EmptyOrInsufficientData()

    mapping = resolve_columns(table, settings.column_tokens)
    logger.debug("Resolved columns for %s: %s", filename, mapping)

    records = normalize_records(table, mapping, settings.missing_product_label)
    if not records:
        raise NoValidRecords()

    insights = generate_insights(records)
    logger.info(
        "Processed %s: %d records, total %.2f", filename, len(records), insights.total_sales
    )
    return AnalysisResult(records=tuple(records), insights=insights, mapping=mapping, filename=filename)


@dataclass(frozen=True)
class UploadToken:
    upload_id: Any
    sequence: int


class UploadSlot:
    """Single in-flight upload slot.

    Starting a new upload cancels the one in flight: its token goes stale and
    a later :meth:`commit` with it is ignored.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._in_flight: Optional[UploadToken] = None
        self._last_upload_id: Any = None
        self.result: Optional[AnalysisResult] = None

    def begin(self, upload_id: Any) -> UploadToken:
        if self._in_flight is not None:
            logger.info("Cancelling in-flight upload %r", self._in_flight.upload_id)
        token = UploadToken(upload_id=upload_id, sequence=next(self._counter))
        self._in_flight = token
        return token

    def is_current(self, token: UploadToken) -> bool:
        return self._in_flight == token

    def is_handled(self, upload_id: Any) -> bool:
        """Whether ``upload_id`` already ran to completion (success or failure)."""

        return self._in_flight is None and upload_id is not None and upload_id == self._last_upload_id

    def commit(self, token: UploadToken, result: Optional[AnalysisResult]) -> bool:
        """Publish ``result`` (``None`` for a failed upload) if ``token`` is current."""

        if not self.is_current(token):
            logger.warning("Ignoring stale result for upload %r", token.upload_id)
            return False
        self.result = result
        self._last_upload_id = token.upload_id
        self._in_flight = None
        return True


def process_upload(
    slot: UploadSlot,
    upload_id: Any,
    filename: str,
    payload: bytes,
    settings: Optional[Settings] = None,
) -> AnalysisResult:
    """Run the pipeline inside ``slot``.

    Any previous result is cleared before processing starts, so a failed
    upload never leaves stale output behind.  Errors propagate to the caller.
    """

    token = slot.begin(upload_id)
    slot.result = None
    try:
        result = run_pipeline(filename, payload, settings)
    except Exception:
        slot.commit(token, None)
        raise
    slot.commit(token, result)
    return result
