"""Module holding constants used across branch-sync."""

GH_BIN = "gh"
GH_INSTALL_URL = "https://cli.github.com/"
GH_TIMEOUT_SEC = 30
GH_READ_RETRIES = 2  # extra attempts for read-only calls
GH_RETRY_DELAY_SEC = 1.0
REPO_LIST_LIMIT = 1000
DEFAULT_BRANCH = "main"
DEFAULT_JOBS = 4
