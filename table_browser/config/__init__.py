"""
Config package for table_browser.

Responsible for:
- config models (TableConfig, ColumnConfig, ColumnFormat)
- config I/O helpers (load_table_config / resolve_data_source)
"""

from .model import TableConfig, ColumnConfig, ColumnFormat, FormatType, Transform
from .loader import load_table_config, resolve_data_source
