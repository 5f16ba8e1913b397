"""Machine-readable error strings carried in failed answers.

These are for logs and diagnostics and are never localized.
"""

NO_MESSAGE = "no message given"
MALFORMED_MESSAGE = "message could not be parsed"
NO_INTENT = "message has no intent name"
NO_USER = "message has no user id"
NO_DETAIL_ENTITY = "no detail entity given"
BULK_SET_UNSUPPORTED = "setting all details at once is not supported"
NO_LINKING_CODE = "no linking code given"
CODE_RECORD_NOT_FOUND = "no record found for linking code"
WRONG_CODE = "linking code does not match"
CODE_TIMEOUT = "linking code timed out"
SELF_LINK = "linking code belongs to the requesting user"
NO_MESSENGER_IDENTITY = "requesting user has no messenger identity to link"
CODE_NOT_STORED = "linking code was not stored"
NO_MESSENGER = "no messenger entity given"
SHADOW_NOT_DELETED = "shadow account could not be deleted"


def unknown_operation(name: str) -> str:
    return f"Operation '{name}' does not exist"


def detail_not_found(detail: str) -> str:
    return f"detail '{detail}' not found"


def value_missing(detail: str) -> str:
    return f"no value given for detail '{detail}'"


def code_attempts_exhausted(attempts: int) -> str:
    return f"Could not issue a unique linking code after {attempts} attempts"


def accounts_not_modified(operation: str) -> str:
    return f"account {operation} was not acknowledged"


def unlink_not_acknowledged(messenger: str) -> str:
    return f"unlinking messenger '{messenger}' was not acknowledged"
