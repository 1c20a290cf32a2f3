"""Table-level change notifications.

Every committed session publishes the names of the tables it wrote to. Readers
treat a notification as "something in this table changed" and refetch the
whole list; nothing is diffed or merged.
"""
import logging
import threading
from collections import defaultdict
from typing import Callable, Dict, List

from sqlalchemy import event
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str, str], None]

_PENDING_TABLES = "changed_tables"


class ChangeFeed:
    def __init__(self):
        self._subscribers: Dict[str, List[ChangeCallback]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, table: str, callback: ChangeCallback) -> Callable[[], None]:
        with self._lock:
            self._subscribers[table].append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers[table]:
                    self._subscribers[table].remove(callback)

        return unsubscribe

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return len(self._subscribers[table])

    def publish(self, table: str, event_name: str = "changed"):
        with self._lock:
            callbacks = list(self._subscribers[table])

        for callback in callbacks:
            try:
                callback(table, event_name)
            except Exception:
                # one broken listener must not stop delivery to the rest
                logger.exception("Change listener failed for table %s", table)


class LiveQuery:
    """Holds the latest full result of ``fetch`` for one table.

    Each notification triggers a complete refetch. Refetches may finish out of
    order on different threads; a result is kept only if no later
    notification's result has already been applied, so the held rows always
    come from the newest notification.
    """

    def __init__(self, feed: ChangeFeed, table: str, fetch: Callable[[], list]):
        self.table = table
        self._fetch = fetch
        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0
        self.refetch_count = 0
        self.rows = fetch()
        self._unsubscribe = feed.subscribe(table, self._on_change)

    def _on_change(self, table: str, event_name: str):
        with self._lock:
            self._issued += 1
            sequence = self._issued

        rows = self._fetch()

        with self._lock:
            if sequence < self._applied:
                logger.debug("Dropped stale refetch %s for %s", sequence, table)
                return
            self._applied = sequence
            self.rows = rows
            self.refetch_count += 1

    def close(self):
        self._unsubscribe()


change_feed = ChangeFeed()


def _mark_tables(session: Session, tables):
    pending = session.info.setdefault(_PENDING_TABLES, set())
    pending.update(tables)


@event.listens_for(Session, "after_flush")
def _collect_flushed_tables(session, flush_context):
    tables = set()
    for obj in list(session.new) + list(session.dirty) + list(session.deleted):
        table_name = getattr(obj, "__tablename__", None)
        if table_name:
            tables.add(table_name)
    _mark_tables(session, tables)


@event.listens_for(Session, "do_orm_execute")
def _collect_bulk_tables(orm_execute_state):
    # conditional status updates bypass the flush
    if not (orm_execute_state.is_update or orm_execute_state.is_delete):
        return
    mapper = orm_execute_state.bind_mapper
    if mapper is not None:
        _mark_tables(orm_execute_state.session, {mapper.local_table.name})


@event.listens_for(Session, "after_commit")
def _publish_committed_tables(session):
    tables = session.info.pop(_PENDING_TABLES, set())
    for table_name in sorted(tables):
        change_feed.publish(table_name)


@event.listens_for(Session, "after_soft_rollback")
def _discard_rolled_back_tables(session, previous_transaction):
    session.info.pop(_PENDING_TABLES, None)
