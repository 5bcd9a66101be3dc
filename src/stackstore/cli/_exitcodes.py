"""Exit codes for the stackstore CLI."""

SUCCESS = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2
STORAGE_ERROR = 3
CORRUPT_STORE = 4
