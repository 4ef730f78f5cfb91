

class TableBrowserError(Exception):
    """Base exception for all table_browser errors"""
    pass

class ConfigError(TableBrowserError):
    """table.json is unreadable, not a JSON object, or names no data source"""
    pass

class IngestError(TableBrowserError):
    """
    Raw records could not be read from the configured source:
    missing file, unreachable URL, undecodable text, etc
    """
    pass
