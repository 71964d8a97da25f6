"""Tests for fetch_as_data_url()."""
import base64
import json
import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from gravatar_app.models.gravatar import FailureReason
from gravatar_app.services.fetcher import fetch_as_data_url, to_data_url

URL = "https://secure.gravatar.com/avatar/0123456789abcdef"
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


def _response(status_code: int, content: bytes = b"") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    return response


def _fetcher_records(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == "gravatar_app.services.fetcher"]


class TestFetchSuccess:
    def test_returns_png_data_url(self) -> None:
        """HTTP 200 body X yields exactly data:image/png;base64, + base64(X)."""
        with patch("gravatar_app.services.fetcher.requests.get", return_value=_response(200, PNG_BYTES)):
            result = fetch_as_data_url(URL)
        assert result.ok
        assert result.failure is None
        assert result.data_url == "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()

    def test_passes_timeout(self) -> None:
        with patch(
            "gravatar_app.services.fetcher.requests.get", return_value=_response(200, b"x")
        ) as mock_get:
            fetch_as_data_url(URL, timeout=2)
        mock_get.assert_called_once_with(URL, timeout=2)

    def test_default_timeout_is_five_seconds(self) -> None:
        with patch(
            "gravatar_app.services.fetcher.requests.get", return_value=_response(200, b"x")
        ) as mock_get:
            fetch_as_data_url(URL)
        assert mock_get.call_args.kwargs["timeout"] == 5

    def test_any_2xx_is_success(self) -> None:
        with patch("gravatar_app.services.fetcher.requests.get", return_value=_response(203, b"ok")):
            assert fetch_as_data_url(URL).ok

    def test_no_line_wrapping(self) -> None:
        assert "\n" not in to_data_url(b"\x00" * 4096)


class TestFetchDegradation:
    def test_404_returns_none_and_logs_once(self, caplog: pytest.LogCaptureFixture) -> None:
        """A 404 yields no data URL and exactly one warning carrying the status."""
        caplog.set_level(logging.WARNING)
        with patch("gravatar_app.services.fetcher.requests.get", return_value=_response(404)):
            result = fetch_as_data_url(URL, email="user@example.com")

        assert result.data_url is None
        assert result.failure is not None
        assert result.failure.reason == FailureReason.status
        assert result.failure.status_code == 404

        records = _fetcher_records(caplog)
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert records[0].status == 404
        assert records[0].url == URL
        assert records[0].email == "user@example.com"
        assert "404" in records[0].getMessage()

    def test_redirect_status_is_failure(self) -> None:
        with patch("gravatar_app.services.fetcher.requests.get", return_value=_response(304)):
            assert fetch_as_data_url(URL).data_url is None

    @pytest.mark.parametrize(
        "exc",
        [
            requests.Timeout("timed out"),
            requests.ConnectionError("connection refused"),
        ],
    )
    def test_transport_error_returns_none(
        self, exc: Exception, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Transport errors are logged, never raised."""
        caplog.set_level(logging.WARNING)
        with patch("gravatar_app.services.fetcher.requests.get", side_effect=exc):
            result = fetch_as_data_url(URL)

        assert result.data_url is None
        assert result.failure is not None
        assert result.failure.reason == FailureReason.transport
        assert result.failure.error == str(exc)

        records = _fetcher_records(caplog)
        assert len(records) == 1
        assert records[0].error == str(exc)
        assert records[0].url == URL
        assert records[0].email is None

    def test_nonstandard_status_returns_none(self) -> None:
        """An out-of-range status like 999 is a failure, not an exception."""
        with patch("gravatar_app.services.fetcher.requests.get", return_value=_response(999)):
            result = fetch_as_data_url(URL)
        assert result.data_url is None
        assert result.failure is not None
        assert result.failure.status_code == 999


def test_warning_is_written_as_json_with_context(caplog: pytest.LogCaptureFixture) -> None:
    """The fetcher logger's JSON handler writes email, url and status."""
    from gravatar_app.core.logging import JSONFormatter

    caplog.set_level(logging.WARNING)
    with patch("gravatar_app.services.fetcher.requests.get", return_value=_response(404)):
        fetch_as_data_url(URL, email="user@example.com")

    handlers = logging.getLogger("gravatar_app.services.fetcher").handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JSONFormatter)

    record = _fetcher_records(caplog)[0]
    parsed = json.loads(handlers[0].format(record))
    assert parsed["level"] == "WARNING"
    assert parsed["service"] == "gravatar_app.services.fetcher"
    assert parsed["email"] == "user@example.com"
    assert parsed["url"] == URL
    assert parsed["status"] == 404
