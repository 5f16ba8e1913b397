"""Shared test fixtures for the intent resolver test suite."""

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from intent_resolver.answers import AnswerBuilder
from intent_resolver.gateway import DatabaseGateway, UserProfile, WriteResult
from intent_resolver.messages import Message


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "app_name = 'dev'",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test."""
    from intent_resolver.config import get_settings
    from intent_resolver.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture
def make_message() -> Callable[..., Message]:
    """Factory fixture for NLU messages.

    Usage:
        message = make_message("database-get", entities=[{"entity": "detail-home"}])
    """

    def _make_message(
        intent: str | None = "database-get",
        user_id: str | None = "u1",
        entities: list[dict[str, Any]] | None = None,
        identities: list[dict[str, str]] | None = None,
    ) -> Message:
        payload: dict[str, Any] = {"entities": entities or []}
        if intent is not None:
            payload["intent"] = {"name": intent}
        if user_id is not None:
            payload["user"] = {
                "id": user_id,
                "messengerIdentities": identities
                if identities is not None
                else [{"messenger": "telegram", "id": "tg-1"}],
            }
        return Message.model_validate(payload)

    return _make_message


@pytest.fixture
def answers() -> AnswerBuilder:
    """German answer builder, the service default."""
    return AnswerBuilder()


@pytest.fixture
def gateway() -> AsyncMock:
    """Profile store double with successful defaults for every call."""
    mock = AsyncMock(spec=DatabaseGateway)
    mock.get_details.return_value = UserProfile(id="u1")
    mock.get_user.return_value = UserProfile(id="main")
    mock.issue_code.return_value = WriteResult(ok=1, inserted_count=1)
    mock.lookup_code.return_value = None
    mock.merge_accounts.return_value = WriteResult(ok=1, n_modified=1)
    mock.link_account.return_value = WriteResult(ok=1, n_modified=1)
    mock.unlink_messenger.return_value = WriteResult(ok=1, n_modified=1)
    mock.set_detail.return_value = None
    mock.remove_detail.return_value = None
    mock.remove_details.return_value = None
    mock.delete_user.return_value = None
    return mock
