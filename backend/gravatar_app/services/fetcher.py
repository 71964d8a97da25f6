"""Download avatar images and inline them as data URLs."""
import base64
from typing import Optional

import requests

from gravatar_app.core.logging import setup_logging
from gravatar_app.models.gravatar import FailureReason, FetchFailure, FetchResult

logger = setup_logging(__name__)

# Gravatar serves PNG whatever extension was requested.
DATA_URL_PREFIX = "data:image/png;base64,"
DEFAULT_TIMEOUT = 5


def to_data_url(content: bytes) -> str:
    return DATA_URL_PREFIX + base64.b64encode(content).decode("ascii")


def fetch_as_data_url(
    url: str, timeout: float = DEFAULT_TIMEOUT, email: Optional[str] = None
) -> FetchResult:
    """GET ``url`` and return its body as a PNG data URL.

    Never raises. A non-2xx status or a transport error yields a result
    carrying a FetchFailure, and one warning is logged with the email, URL
    and status code or error.
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning(
            "Failed to convert Gravatar to base64",
            extra={"email": email, "url": url, "error": str(exc)},
        )
        return FetchResult(
            failure=FetchFailure(reason=FailureReason.transport, url=url, error=str(exc))
        )

    if 200 <= response.status_code < 300:
        return FetchResult(data_url=to_data_url(response.content))

    logger.warning(
        "Gravatar request unsuccessful (status %d)",
        response.status_code,
        extra={"email": email, "url": url, "status": response.status_code},
    )
    return FetchResult(
        failure=FetchFailure(
            reason=FailureReason.status, url=url, status_code=response.status_code
        )
    )
