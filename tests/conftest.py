# tests/conftest.py
import json
import pytest
from unittest.mock import AsyncMock, MagicMock
from pathlib import Path

from gdrivefs.config import Settings, get_settings
from gdrivefs.session import ApiResponse, Token


@pytest.fixture
def mock_settings():
    """
    Provides a mock of the application settings for testing.
    This avoids the need for environment variables during tests.
    """
    settings = MagicMock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.GDRIVE_CREDENTIALS_JSON = json.dumps(
        {"installed": {"client_id": "test_client_id", "client_secret": "test_client_secret"}}
    )
    settings.GDRIVE_TOKEN_JSON = json.dumps(
        {"token": "test_token", "refresh_token": "test_refresh_token"}
    )
    settings.GDRIVE_FILES_URL = "https://www.googleapis.com/drive/v3/files"
    settings.GDRIVE_UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3/files"
    settings.GDRIVE_PAGE_SIZE = 1000
    settings.HTTP_TIMEOUT_SECONDS = 5.0
    settings.BASE_DIR = Path("/tmp")
    settings.LOG_FILE = Path("/tmp/gdrivefs.log")
    return settings


@pytest.fixture(autouse=True)
def patch_settings_class(monkeypatch, mock_settings):
    """
    This autouse fixture automatically replaces the `Settings` class constructor.
    Any part of the app code that calls `Settings()` during a test run will
    receive the `mock_settings` instance instead of a real settings object.
    """
    # get_settings might have cached a real instance during test collection.
    get_settings.cache_clear()
    monkeypatch.setattr("gdrivefs.config.Settings", lambda *args, **kwargs: mock_settings)
    yield
    get_settings.cache_clear()


@pytest.fixture
def drive_client():
    """A fake DriveClient whose structured calls are AsyncMocks."""
    client = MagicMock()
    client.files.list = AsyncMock(return_value=ApiResponse(result={"files": []}))
    client.files.create = AsyncMock(return_value=ApiResponse(result={"id": "new_id"}))
    client.files.get = AsyncMock(return_value=ApiResponse(result={}))
    client.get_token.return_value = Token(token_type="Bearer", access_token="test_token")
    return client


@pytest.fixture
def session_provider(drive_client):
    """A session provider that always logs in to `drive_client`."""
    provider = MagicMock()
    provider.login = AsyncMock(return_value=drive_client)
    return provider
