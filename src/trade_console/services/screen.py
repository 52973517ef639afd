"""ListScreen: one screen's fetch/patch lifecycle around its own ViewEngine."""

from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Any, Dict, List, Optional, TextIO

from trade_console.config.constants import ALL
from trade_console.config.screens import ScreenConfig
from trade_console.models.core import FilterConfig, Record, ViewResult
from trade_console.services import export as exporter
from trade_console.services import metrics
from trade_console.services.api import AdminApiClient, ApiError
from trade_console.services.collections import patch_record, record_id, remove_record, replace_record
from trade_console.services.engine import ViewEngine

logger = logging.getLogger(__name__)


class ListScreen:
    """
    Binds a ScreenConfig, an API client and one ViewEngine.

    The engine sees only whole collections: a refresh replaces everything, and
    create/update/delete acknowledgements are applied by building a new list.
    """

    def __init__(self, config: ScreenConfig, client: Optional[AdminApiClient] = None) -> None:
        self.config = config
        self.client = client
        self.engine = ViewEngine(
            search_paths=config.search_paths,
            filters=FilterConfig(facets={f.field: ALL for f in config.facets}),
            sort=config.default_sort,
        )
        self.last_error: Optional[str] = None
        self._refresh_lock = threading.Lock()

    @property
    def result(self) -> ViewResult:
        return self.engine.result

    @property
    def records(self) -> List[Record]:
        return list(self.engine.collection)

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_lock.locked()

    def load(self, records: List[Record]) -> ViewResult:
        """Hand a fetched collection to the engine, normalized for this screen."""
        if self.config.normalize is not None:
            records = [self.config.normalize(r) for r in records]
        return self.engine.set_collection(records)

    def refresh(self) -> bool:
        """
        Refetch the whole collection.

        Returns False without doing anything if a refresh is already running.
        On failure the previous collection stays in place, last_error is set
        and the ApiError propagates.
        """
        client = self._require_client()
        if not self._refresh_lock.acquire(blocking=False):
            logger.info("Refresh of %s ignored: one is already in flight", self.config.key)
            return False
        try:
            records = client.fetch_collection(
                self.config.endpoint,
                params=self.config.params,
                key=self.config.collection_key,
            )
        except ApiError as e:
            self.last_error = e.message
            logger.warning("Refresh of %s failed, keeping %d cached row(s): %s",
                           self.config.key, len(self.engine.collection), e.message)
            raise
        finally:
            self._refresh_lock.release()
        self.last_error = None
        self.load(records)
        return True

    # --- local patches after backend acknowledgement ---

    def apply_update(self, record: Record) -> ViewResult:
        if self.config.normalize is not None:
            record = self.config.normalize(record)
        return self.engine.set_collection(replace_record(self.engine.collection, record))

    def apply_patch(self, rid: str, changes: Dict[str, Any]) -> ViewResult:
        updated = patch_record(self.engine.collection, rid, changes)
        if self.config.normalize is not None:
            updated = [self.config.normalize(r) if record_id(r) == rid else r for r in updated]
        return self.engine.set_collection(updated)

    def apply_delete(self, rid: str) -> ViewResult:
        return self.engine.set_collection(remove_record(self.engine.collection, rid))

    @property
    def can_delete(self) -> bool:
        return self.config.deletable

    @property
    def can_change_status(self) -> bool:
        return self.config.status_action is not None

    def delete(self, rid: str) -> ViewResult:
        """DELETE the record on the backend, then drop it locally."""
        if not self.can_delete:
            raise ValueError(f"Records of {self.config.key!r} cannot be deleted")
        self._require_client().delete(self.config.item_url(rid))
        logger.info("Deleted %s %s", self.config.key, rid)
        return self.apply_delete(rid)

    def set_field(self, rid: str, action: str, changes: Dict[str, Any]) -> ViewResult:
        """
        PATCH a sub-resource such as /admin/users/<id>/status, then update locally.

        The server's copy of the record wins when the response carries one;
        otherwise changes are merged into the cached record.
        """
        body = self._require_client().patch(f"{self.config.item_url(rid)}/{action}", changes)
        logger.info("Updated %s %s %s: %s", self.config.key, rid, action, changes)
        data = body.get("data") if isinstance(body, dict) else None
        if isinstance(data, dict) and record_id(data) == rid:
            return self.apply_update(data)
        return self.apply_patch(rid, changes)

    def change_status(self, rid: str, value: Any, **extra: Any) -> ViewResult:
        """Status dropdown in the record dialog; extra fields (e.g. adminNotes) ride along."""
        if not self.can_change_status:
            raise ValueError(f"Screen {self.config.key!r} has no status action")
        changes = {self.config.status_field: value}
        changes.update(extra)
        return self.set_field(rid, self.config.status_action, changes)

    def _require_client(self) -> AdminApiClient:
        if self.client is None:
            raise RuntimeError(f"Screen {self.config.key!r} has no API client")
        return self.client

    # --- summaries and export ---

    def stats(self) -> Dict[str, Any]:
        return metrics.screen_stats(self.config.key, list(self.engine.collection))

    def export_rows(self) -> List[List[str]]:
        return self.engine.export(self.config.export)

    def export_csv(self, stream: TextIO) -> int:
        """Write the filtered+sorted rows as CSV. Returns the number of data rows."""
        count = exporter.write_csv(stream, self.config.export, self.engine.filtered_sorted)
        logger.info("Exported %d %s row(s)", count, self.config.key)
        return count

    def export_filename(self, today: Optional[date] = None) -> str:
        return exporter.export_filename(self.config.export_entity, today)
