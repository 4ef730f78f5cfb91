from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import IO, Dict, List, Union

import pandas as pd

from table_browser.core.dataset import TableDataset
from table_browser.core.exceptions import IngestError

logger = logging.getLogger(__name__)

Source = Union[str, Path, IO[str]]


def _describe(source: Source) -> str:
    return str(source) if isinstance(source, (str, Path)) else type(source).__name__


def read_records_frame(source: Source) -> pd.DataFrame:
    """
    Read delimited text into a string-only DataFrame.

    - headers are trimmed and lower-cased
    - every value is kept as trimmed text; missing trailing fields are ""
    - blank lines are skipped
    - fields beyond the header width are dropped, the row itself is kept

    :param source: file path, URL or text buffer
    :raises IngestError: if the source cannot be read or parsed
    """
    n_ragged = 0

    def keep_ragged_row(fields: List[str]) -> List[str]:
        nonlocal n_ragged
        n_ragged += 1
        return fields

    try:
        with warnings.catch_warnings():
            # the python engine truncates over-long rows returned by on_bad_lines, with a warning per row
            warnings.simplefilter("ignore", pd.errors.ParserWarning)
            frame = pd.read_csv(
                source,
                dtype=str,
                engine="python",
                index_col=False,
                keep_default_na=False,
                skip_blank_lines=True,
                on_bad_lines=keep_ragged_row,
            )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (OSError, ValueError, pd.errors.ParserError) as e:
        raise IngestError(f"Could not read records from {_describe(source)}: {e}") from e

    if n_ragged:
        logger.warning(
            "Dropped extra fields from over-long rows",
            extra={"source": _describe(source), "n_rows": n_ragged},
        )

    frame.columns = [str(c).strip().lower() for c in frame.columns]
    frame = frame.fillna("")
    for col in frame.columns:
        frame[col] = frame[col].str.strip()
    return frame


def load_records(source: Source) -> List[Dict[str, str]]:
    frame = read_records_frame(source)
    records = frame.to_dict("records")
    logger.info(
        "Records loaded",
        extra={"source": _describe(source), "n_records": len(records), "columns": list(frame.columns)},
    )
    return records


def load_dataset(source: Source, name: str | None = None) -> TableDataset:
    frame = read_records_frame(source)
    logger.info(
        "Dataset loaded",
        extra={"source": _describe(source), "n_records": len(frame), "columns": list(frame.columns)},
    )
    return TableDataset(frame, name=name or _describe(source))
