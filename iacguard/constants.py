"""Application-wide constants and version helpers."""

VERSION = "development"
SCM_COMMIT = "NOCOMMIT"
SENTRY_DSN = ""

FULLNAME = "Keeping Infrastructure as Code Secure"
DEFAULT_LOG_FILE = "info.log"
DEFAULT_CONFIG_FILENAME = "kics.config"

MINIMUM_PREVIEW_LINES = 1
MAXIMUM_PREVIEW_LINES = 30

ENGINE_ERROR_CODE = 126
SIGNAL_INTERRUPT_CODE = 130

MAX_INTEGER = 2**63 - 1

SENTRY_REFRESH_RATE = 2


def get_release() -> str:
    """Return the release identifier in the form 'kics@<version>'."""
    return f"kics@{VERSION}"


def get_version() -> str:
    """Return the full product name followed by the version."""
    return f"{FULLNAME} {VERSION}"