"""Tests for logging setup and the exception hierarchy."""

import logging
from collections.abc import Iterator

import pytest
import structlog

from credentials_facebook.core.logging import get_logger, mask_token, setup_logging
from credentials_facebook.exceptions import (
    AuthenticationError,
    ConfigurationError,
    CredentialsFacebookError,
    GraphAPIError,
    TokenExchangeError,
)


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Reset structlog and the root logger after a logging test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.mark.unit
class TestMaskToken:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            (None, "<none>"),
            ("", "<none>"),
            ("short-token", "***"),
            ("EAABsbCS1iHgBAKZCZAiXtoken1234", "EAABsb...1234"),
        ],
    )
    def test_mask_token(self, token: str | None, expected: str) -> None:
        assert mask_token(token) == expected


@pytest.mark.unit
@pytest.mark.usefixtures("restore_logging")
class TestSetupLogging:
    """Test structlog configuration."""

    def test_json_logs(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="DEBUG", json_logs=True)

        get_logger("credentials_facebook.test").info("json_event", category="auth")

        out = capsys.readouterr().out
        assert '"event": "json_event"' in out
        assert '"category": "auth"' in out

    def test_rich_logs_level(self) -> None:
        setup_logging(level="warning")

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_debug_keeps_httpx_quiet(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING


@pytest.mark.unit
class TestExceptions:
    """Test the exception hierarchy."""

    def test_authentication_error(self) -> None:
        error = AuthenticationError(headers={"WWW-Authenticate": "FacebookToken"})

        assert isinstance(error, CredentialsFacebookError)
        assert error.status_code == 401
        assert error.error_type == "authentication_error"
        assert error.message == "Authentication failed"
        assert error.headers == {"WWW-Authenticate": "FacebookToken"}

    def test_graph_api_error(self) -> None:
        error = GraphAPIError("upstream failed", upstream_status=400)

        assert error.status_code == 502
        assert error.error_type == "graph_api_error"
        assert error.upstream_status == 400
        assert str(error) == "upstream failed"

    def test_token_exchange_error_is_graph_error(self) -> None:
        assert issubclass(TokenExchangeError, GraphAPIError)

    def test_configuration_error(self) -> None:
        error = ConfigurationError("bad config")
        assert error.error_type == "configuration_error"
        assert error.status_code == 500
