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
Module that provides bot interaction logic.

Implements asyncio coroutines that are executed upon
/start and /help command, plain text messages and the event
of a user sending a photo to a bot

"""

import asyncio
import logging
from pathlib import Path
import tempfile
import time

import aiohttp
from searchface import (
    MalformedResponse,
    MAX_RESULTS,
    PresentableItem,
    search,
    UpstreamError,
)
from telegram import InputMediaPhoto, Message, PhotoSize, Update
from telegram.constants import ChatAction
from telegram.error import TelegramError
from telegram.ext import ContextTypes


logger = logging.getLogger(__name__)


PROMPT_TEXT = "📷 Send me a photo and I'll look for similar faces."
NO_MATCHES_TEXT = "🤷 No matches found."


async def start_cmd(update: Update, ctx: ContextTypes.DEFAULT_TYPE):
    """Handle /start command logic.

    Attributes:
        update: Update event
        ctx: callback context
    """
    if not update.message:
        return

    await update.message.reply_text(PROMPT_TEXT)

help_cmd = start_cmd  # alias
text_received = start_cmd


async def download_photo(bot, photo: PhotoSize) -> Path:
    """Save a Telegram photo into the system temp directory.

    Returns:
        Path: local file named by the current nanosecond timestamp
    """
    photo_path = Path(tempfile.gettempdir()) / str(time.time_ns())
    file = await bot.get_file(photo.file_id)
    await file.download_to_drive(custom_path=photo_path)
    return photo_path


async def send_album(message: Message, items: list[PresentableItem]):
    """Reply with the search results as a photo album.

    Items whose image URL could not be decoded are listed
    in a text message instead.
    """
    with_url = [item for item in items if item.image_url]
    without_url = [item for item in items if not item.image_url]

    try:
        if not items:
            await message.reply_text(NO_MATCHES_TEXT)
        elif len(with_url) == 1:
            await message.reply_photo(
                with_url[0].image_url, caption=with_url[0].caption
            )
        elif with_url:
            await message.reply_media_group(media=[
                InputMediaPhoto(media=item.image_url, caption=item.caption)
                for item in with_url
            ])
    except TelegramError as e:
        logger.error(f"Error while sending album: {e}")

    if not without_url:
        return

    try:
        await message.reply_text("\n".join(
            f"{item.caption} (image unavailable)" for item in without_url
        ))
    except TelegramError as e:
        logger.error(f"Error while sending unavailable images list: {e}")


async def photo_received(update: Update, ctx: ContextTypes.DEFAULT_TYPE):
    """Route user photo through the face search service.

    Downloads the largest photo size, uploads it to searchface.ru,
    decodes the ranked response and replies with an album
    of the best matches.

    Attributes:
        update (telegram.Update): the telegram update event
            containing the message info
        ctx: callback context; bot_data holds the search gateway
            and the album size limit
    """
    if not update.message:
        return

    message = update.message
    if not message.photo:
        await message.reply_text("❌ Please, provide a photo.")
        return

    gateway = ctx.bot_data["gateway"]
    max_results = ctx.bot_data.get("max_results", MAX_RESULTS)

    await ctx.bot.send_chat_action(
        chat_id=message.chat_id,
        action=ChatAction.UPLOAD_PHOTO
    )

    try:
        photo_path = await download_photo(ctx.bot, message.photo[-1])
    except TelegramError as e:
        logger.error(f"Could not download photo: {e}")
        await message.reply_text("❌ Could not download the photo.")
        return

    try:
        items = await search(gateway, photo_path, max_results)
        logger.info(
            f"Search for chat {message.chat_id} returned {len(items)} items"
        )

    except UpstreamError as e:
        await message.reply_text(f"❌ Search failed: {e.detail}")
        return

    except MalformedResponse as e:
        logger.error(f"Unexpected search service response: {e}")
        await message.reply_text(
            "❌ Could not understand the search service response."
        )
        return

    except asyncio.TimeoutError:
        logger.error("Search request timed out")
        await message.reply_text(
            "⏰ Search timed out. The service might be overloaded. "
            "Please try again."
        )
        return

    except aiohttp.ClientError as e:
        logger.error(f"Search request failed: {e}")
        await message.reply_text(
            "❌ Could not connect to the search service."
        )
        return

    finally:
        photo_path.unlink(missing_ok=True)

    await send_album(message, items)
