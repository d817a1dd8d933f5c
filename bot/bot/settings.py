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
Configuration settings for Telegram bot derived from pydantic BaseSettings.

This script defines application-wide configuration options
that are loaded from .env file, providing type validation and defaults.
"""

import os

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from searchface import MAX_RESULTS
from searchface.schema import SEARCH_URL, UPLOAD_FIELD


# Get the absolute path to the directory containing this file
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Absolute path to the .env file in the same directory as this script
ENV_PATH = os.path.join(BASE_DIR, '.env')


class Settings(BaseSettings):
    """Application settings loaded from .env file.

    Attributes:
        bot_token (str): Secret token used to authenticate the bot
        with the Telegram Bot API, as issued by BotFather.
        poll_mode (bool, default=True): Whether to receive updates
        by long polling or via webhook. Polling needs no public
        domain or SSL certificate.
        poll_timeout (int, default=10): Long polling timeout in seconds.
        webhook_base (str, optional): Public HTTPS base URL Telegram
        sends updates to. Required in webhook mode.
        secret_token (str, optional): Secret used both in the webhook
        path and as the X-Telegram-Bot-Api-Secret-Token header value.
        Required in webhook mode.
        search_url (str): searchface.ru upload endpoint.
        upload_field (str): multipart field the photo is sent under.
        request_timeout (float): total timeout of a search request.
        max_results (int): album size limit, at most 10 as Telegram
        media groups allow.
        log_level (str): root logging level.

    Environment variables:
        - BOT_TOKEN
        - POLL_MODE
        - POLL_TIMEOUT
        - WEBHOOK_BASE
        - SECRET_TOKEN
        - SEARCH_URL
        - UPLOAD_FIELD
        - REQUEST_TIMEOUT
        - MAX_RESULTS
        - LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_file=ENV_PATH, env_file_encoding='utf-8', extra='ignore')

    bot_token: str = Field(...)
    poll_mode: bool = Field(default=True)
    poll_timeout: int = Field(default=10, ge=0)
    webhook_base: str | None = Field(default=None)
    secret_token: str | None = Field(default=None)
    search_url: str = Field(default=SEARCH_URL)
    upload_field: str = Field(default=UPLOAD_FIELD)
    request_timeout: float = Field(default=30.0, gt=0)
    max_results: int = Field(default=MAX_RESULTS, ge=1, le=MAX_RESULTS)
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def check_webhook_mode(self) -> "Settings":
        """Webhook mode cannot start without a public URL and a secret."""
        if not self.poll_mode and not (self.webhook_base and self.secret_token):
            raise ValueError(
                "WEBHOOK_BASE and SECRET_TOKEN are required "
                "when POLL_MODE is false"
            )
        return self


settings = Settings()
