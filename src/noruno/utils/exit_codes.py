"""
Exit codes for the Noruno CLI.

Semantic exit codes so scripts can tell what went wrong.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or configuration
ERROR_INVALID_ARGS = 2

# Mail transport failure (SMTP unreachable, auth rejected)
ERROR_NETWORK = 4

# Resource not found
ERROR_NOT_FOUND = 5

# Storage backend failure
ERROR_PERSISTENCE = 7


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NETWORK: "ERROR_NETWORK",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_PERSISTENCE: "ERROR_PERSISTENCE",
    }
    return code_names.get(code, f"UNKNOWN({code})")
