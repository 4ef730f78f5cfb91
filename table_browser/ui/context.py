from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from table_browser.config.model import TableConfig
from table_browser.core.dataset import TableDataset
from table_browser.core.session import TableSession
from table_browser.services.export_service import ExportService
from table_browser.services.session_service import SessionService


@dataclass
class AppContext:
    """
    Holds shared state for the Dash app: table config, the loaded dataset and
    the services. This is passed into layout + callback registration
    functions instead of using module-level globals.
    """
    config: TableConfig
    dataset: TableDataset
    session_service: SessionService
    export_service: ExportService

    def session(self, session_id: Optional[str]) -> Optional[TableSession]:
        if not session_id:
            return None
        return self.session_service.ensure_session(session_id)
