from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Callable, Optional

from table_browser.config.model import TableConfig
from table_browser.core.dataset import TableDataset
from table_browser.core.session import TableSession

logger = logging.getLogger(__name__)


class SessionService:
    """
    Keeps the live TableSessions of the app, keyed by session id.

    Sessions are independent: each browser tab gets its own search, filters,
    sort, page and selection over the shared, read-only dataset. Nothing is
    persisted; the least recently used session is dropped once
    `max_sessions` is exceeded.
    """

    def __init__(
        self,
        config: TableConfig,
        dataset: TableDataset,
        *,
        max_sessions: int = 256,
        session_factory: Optional[Callable[[str], TableSession]] = None,
    ) -> None:
        self.config = config
        self.dataset = dataset
        self.max_sessions = max_sessions
        self._factory = session_factory or self._new_session
        self._sessions: "OrderedDict[str, TableSession]" = OrderedDict()
        self._lock = threading.Lock()

    def _new_session(self, session_id: str) -> TableSession:
        return TableSession(self.config, self.dataset, session_id=session_id)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def get(self, session_id: str) -> Optional[TableSession]:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
            return session

    def ensure_session(self, session_id: str) -> TableSession:
        """Return the session for this id, creating it on first use."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
                return session

            session = self._factory(session_id)
            self._sessions[session_id] = session
            logger.info("Table session created", extra={"session_id": session_id})

            while len(self._sessions) > self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.info("Table session evicted", extra={"session_id": evicted_id})
            return session

    def drop_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None
