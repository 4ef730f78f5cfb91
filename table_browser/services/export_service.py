from __future__ import annotations

import csv
import logging
from typing import Any, Dict, Mapping, Sequence

import pandas as pd

from table_browser.config.model import ColumnConfig
from table_browser.core.compare import to_text
from table_browser.core.pipeline import ViewResult

logger = logging.getLogger(__name__)


class ExportService:
    """
    Serialises table rows to CSV.

    Stateless: exports whatever sequence it is handed. For a view that is the
    full filtered/sorted sequence (every page) over the visible columns.
    """

    filename = "export.csv"

    def rows_to_csv(self, rows: Sequence[Mapping[str, Any]], columns: Sequence[ColumnConfig]) -> str:
        """
        Every field double-quoted (inner quotes doubled), header row from the
        column labels, rows joined by newlines without a trailing one.
        """
        if not columns:
            return ""

        data: Dict[str, list] = {
            col.key: [to_text(row.get(col.key)) for row in rows] for col in columns
        }
        frame = pd.DataFrame(data, columns=[c.key for c in columns])
        frame.columns = [c.label for c in columns]

        text = frame.to_csv(
            index=False,
            quoting=csv.QUOTE_ALL,
            lineterminator="\n",
        )
        return text.rstrip("\n")

    def export_view(self, view: ViewResult) -> str:
        rows = view.filtered_records()
        logger.info(
            "Exporting view",
            extra={"n_rows": len(rows), "columns": [c.key for c in view.visible_columns]},
        )
        return self.rows_to_csv(rows, view.visible_columns)
