"""
Custom error classes for Studio Admin Hub.
Structured errors with codes for the data access layer and service surface.
The text and analytics core never raises these; it substitutes defaults.

Hierarchy:
    HubError
    ├── DataError
    │   ├── ConfigError
    │   ├── DataFetchError
    │   └── DataWriteError
    └── ExportError
"""


class HubError(Exception):
    """Base exception for all Studio Admin Hub errors."""

    def __init__(self, message: str, code: str = "UNKNOWN", details: dict = None):
        self.code = code
        self.details = details or {}
        super().__init__(f"[{code}] {message}")


# --- Data Errors ---

class DataError(HubError):
    """Base class for data access errors."""
    pass


class ConfigError(DataError):
    """Missing or invalid configuration value."""

    def __init__(self, message: str, setting: str = None):
        super().__init__(
            message, code="CONFIG_ERROR",
            details={"setting": setting},
        )


class DataFetchError(DataError):
    """Failed to read rows from the backend."""

    def __init__(self, message: str, source: str = None):
        super().__init__(
            message, code="DATA_FETCH_FAILED", details={"source": source},
        )


class DataWriteError(DataError):
    """Failed to write or update rows in the backend."""

    def __init__(self, message: str, source: str = None, row_id: str = None):
        super().__init__(
            message, code="DATA_WRITE_FAILED",
            details={"source": source, "row_id": row_id},
        )


# --- Export Errors ---

class ExportError(HubError):
    """Unsupported export format or failed export write."""

    def __init__(self, message: str, export_format: str = None):
        super().__init__(
            message, code="EXPORT_FAILED", details={"format": export_format},
        )
