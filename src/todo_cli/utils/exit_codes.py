"""
Exit codes for todo-cli.

Semantic exit codes so scripts wrapping the CLI can tell what happened.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Google Drive authentication failure (missing credentials, consent refused)
ERROR_AUTH_FAILURE = 3

# Network or remote store error (server unreachable, timeout, non-2xx)
ERROR_NETWORK = 4

# Task or remote document not found
ERROR_NOT_FOUND = 5

# Local task file could not be read or written
ERROR_STORAGE = 6


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_AUTH_FAILURE: "ERROR_AUTH_FAILURE",
        ERROR_NETWORK: "ERROR_NETWORK",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_STORAGE: "ERROR_STORAGE",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_AUTH_FAILURE: "Google Drive authentication failed",
        ERROR_NETWORK: "Network error - check the server URL and connection",
        ERROR_NOT_FOUND: "Todo or remote document not found",
        ERROR_STORAGE: "Local task file could not be read or written",
    }
    return descriptions.get(code, "Unknown error")
