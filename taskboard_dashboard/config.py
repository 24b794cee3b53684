import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class DashboardConfig:
    api_url: str
    request_timeout: float
    log_dir: str


def load_config(env_file: str | None = None) -> DashboardConfig:
    """Read the dashboard configuration from the environment.

    Values from ``env_file`` (or a ``.env`` in the working directory) are
    loaded first but never override variables already set.
    """
    load_dotenv(env_file)

    api_url = os.getenv("TASKBOARD_API_URL", "http://localhost:8000").rstrip("/")
    try:
        request_timeout = float(os.getenv("TASKBOARD_REQUEST_TIMEOUT", "30"))
    except ValueError:
        raise ValueError("TASKBOARD_REQUEST_TIMEOUT must be a number of seconds.")

    return DashboardConfig(
        api_url=api_url,
        request_timeout=request_timeout,
        log_dir=os.getenv("TASKBOARD_LOG_DIR", "logs"),
    )
