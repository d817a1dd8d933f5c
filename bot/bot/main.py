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
Telegram Bot with FastAPI Integration.

A Telegram bot that relays user photos to the searchface.ru
face search service and replies with an album of the best
matches, implemented with python-telegram-bot library
and FastAPI web framework. The bot supports both polling and
webhook deployment modes.

Bot Handlers:
    - /start, /help and plain text: Prompt to send a photo
    - Photo messages: Search for similar faces

Deployment Modes:
    1. Polling Mode: Bot long-polls Telegram servers for updates
    2. Webhook Mode: Telegram sends updates to configured webhook URL

Action Sequence:
    1. Initialize FastAPI app and Telegram bot application
    2. Register command and message handlers for bot functionality
    3. On startup: Configure either polling or webhook mode based on settings
    4. Process incoming updates through registered handlers
    5. Gracefully shutdown bot application on termination

Usage:
    Run with polling: python -m bot
    Run with webhook: set POLL_MODE=false, WEBHOOK_BASE and SECRET_TOKEN,
    then python -m bot
"""

from contextlib import asynccontextmanager
import logging
from typing import Annotated

from fastapi import FastAPI, HTTPException, Header, Request
from searchface import SearchGateway
from telegram import Update
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from .handlers import help_cmd, photo_received, start_cmd, text_received
from .settings import Settings, settings


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def error_handler(update: object, ctx: ContextTypes.DEFAULT_TYPE):
    """Log errors raised by handlers; the update is not retried."""
    logger.error(f"Error while handling update {update}", exc_info=ctx.error)


def build_application(cfg: Settings) -> Application:
    """Create the bot application with handlers and search gateway."""
    tg_app = (
        ApplicationBuilder()
        .token(cfg.bot_token)
        .concurrent_updates(True)
        .build()
    )

    tg_app.bot_data["gateway"] = SearchGateway(
        search_url=cfg.search_url,
        field_name=cfg.upload_field,
        timeout=cfg.request_timeout,
    )
    tg_app.bot_data["max_results"] = cfg.max_results

    # Register handlers
    tg_app.add_handler(CommandHandler("start", start_cmd))
    tg_app.add_handler(CommandHandler("help", help_cmd))
    tg_app.add_handler(
        MessageHandler(filters.PHOTO & ~filters.COMMAND, photo_received)
    )
    tg_app.add_handler(
        MessageHandler(filters.TEXT & ~filters.COMMAND, text_received)
    )
    tg_app.add_error_handler(error_handler)

    return tg_app


tg_app: Application = build_application(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Context manager for app startup/shutdown in webhook mode."""
    # ---------- START-UP ---------- #
    await set_webhook()
    await tg_app.start()

    yield

    # ---------- SHUTDOWN ---------- #
    await tg_app.stop()
    await tg_app.shutdown()


app = FastAPI(title="SearchFaceBot", lifespan=lifespan)


# ---------- POLLING MODE ---------- #
def run_polling():
    """Long-poll Telegram until interrupted."""
    logger.info("Polling started ➜ Ctrl-C to stop")
    tg_app.run_polling(
        timeout=settings.poll_timeout,
        allowed_updates=Update.ALL_TYPES,
    )


# ---------- WEBHOOK MODE ---------- #
WEBHOOK_PATH = f"/webhook/{settings.secret_token}"


@app.get("/health")
def health_check():
    """Report the update delivery mode."""
    return {
        "status": "healthy",
        "service": "searchface-bot",
        "mode": "polling" if settings.poll_mode else "webhook",
    }


@app.post(WEBHOOK_PATH)
async def telegram_webhook(
    request: Request,
    x_telegram_bot_api_secret_token: Annotated[str | None, Header()] = None,
) -> dict:
    """Handle the update if the token is valid.

    Asyncio coroutine that checks whether the request header
    secret token matches the one provided in settings.
    If it does, the request json body is passed through
    process_update method, otherwise, a HTTPException is thrown.

    Attributes:
        request (fastapi.Request): the request sent
        to the exposed webhook point
        x_telegram_bot_api_secret_token

    Returns:
        dict: {"ok": True}
    Raises:
        HTTPException: 403 Forbidden if secret token does not match
    """
    if (
        settings.secret_token is None
        or x_telegram_bot_api_secret_token != settings.secret_token
    ):
        raise HTTPException(status_code=403, detail="Forbidden")
    data = await request.json()
    update = Update.de_json(data, tg_app.bot)
    await tg_app.process_update(update)
    return {"ok": True}


async def set_webhook():
    """Coroutine that sets the webhook updates."""
    await tg_app.initialize()
    await tg_app.bot.set_webhook(
        url=f"{settings.webhook_base}{WEBHOOK_PATH}",
        secret_token=settings.secret_token,
        drop_pending_updates=True,
    )
    logger.info("Webhook registered")


def run_webhook(host: str = "0.0.0.0", port: int = 8000):
    """Serve the webhook endpoint with uvicorn."""
    import uvicorn

    logger.info(f"Starting webhook server on {host}:{port}")
    uvicorn.run(app, host=host, port=port, reload=False)


def run():
    """Start the bot in the configured update mode."""
    if settings.poll_mode:
        run_polling()
    else:
        run_webhook()
