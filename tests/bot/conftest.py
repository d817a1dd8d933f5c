#    Copyright 2025, Stankevich Andrey, stankevich.as@phystech.edu

#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at

#        http://www.apache.org/licenses/LICENSE-2.0

#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""
Pytest configuration and fixtures for the Telegram bot test suite.

Settings are read when bot modules are imported, so the
environment is populated before any of them is loaded.

Fixtures:
- test_settings: fixture for creating mock settings
that are used in further tests
- message: AsyncMock of a telegram message carrying a photo
- update: update event wrapping the message
- ctx: callback context with a mocked bot and search gateway
"""

import os

os.environ.setdefault("BOT_TOKEN", "123456:test-token-42")
os.environ.setdefault("POLL_MODE", "false")
os.environ.setdefault("WEBHOOK_BASE", "https://test-webhook.local")
os.environ.setdefault("SECRET_TOKEN", "test-secret-token-42")

import pytest  # noqa: E402

from bot.settings import Settings  # noqa: E402


@pytest.fixture
def test_settings(monkeypatch):
    """Create a test settings mock."""
    monkeypatch.setenv("BOT_TOKEN", "test-token-42")
    monkeypatch.setenv("POLL_MODE", "true")
    monkeypatch.setenv("WEBHOOK_BASE", "https://test-webhook.local")
    monkeypatch.setenv("SECRET_TOKEN", "test-secret-token-42")
    monkeypatch.setenv("MAX_RESULTS", "5")
    return Settings()


@pytest.fixture
def message(mocker):
    """Telegram message with two photo sizes."""
    msg = mocker.AsyncMock()
    msg.chat_id = 42
    small, large = mocker.Mock(), mocker.Mock()
    small.file_id, large.file_id = "small-id", "large-id"
    msg.photo = [small, large]
    return msg


@pytest.fixture
def update(mocker, message):  # noqa: D103
    upd = mocker.Mock()
    upd.message = message
    return upd


@pytest.fixture
def ctx(mocker, tmp_path):
    """Callback context whose downloads land in tmp_path."""
    context = mocker.Mock()
    context.bot = mocker.AsyncMock()

    async def download_to_drive(custom_path):
        custom_path.write_bytes(b"\xff\xd8\xff\xe0photo")

    telegram_file = mocker.Mock()
    telegram_file.download_to_drive = mocker.AsyncMock(
        side_effect=download_to_drive
    )
    context.bot.get_file.return_value = telegram_file

    gateway = mocker.Mock()
    gateway.upload = mocker.AsyncMock()
    context.bot_data = {"gateway": gateway, "max_results": 10}

    mocker.patch("bot.handlers.tempfile.gettempdir", return_value=str(tmp_path))
    return context
