"""
Structured error codes for run failures.
The runner maps exceptions to these keys and prints the user-facing message.
"""

import pickle

# Known error keys
BAD_ARGUMENT = "bad_argument"
DATA_LOAD_FAILED = "data_load_failed"
NO_POINTS = "no_points"

# Missing, unreadable or corrupt reference tables
DATA_ERRORS: tuple[type[BaseException], ...] = (OSError, EOFError, pickle.UnpicklingError)

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    BAD_ARGUMENT: "Invalid argument. Check region, backend, state and point inputs.",
    DATA_LOAD_FAILED: "Reference data could not be loaded. Set --data-dir or LOGJAM_DATA_DIR.",
    NO_POINTS: "No points to label. Check the points file or the state/population filter.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)


def error_key_for(exc: BaseException) -> str | None:
    """Error key for an exception raised while building a map; None if unknown."""
    if isinstance(exc, ValueError):
        return BAD_ARGUMENT
    if isinstance(exc, DATA_ERRORS):
        return DATA_LOAD_FAILED
    return None
