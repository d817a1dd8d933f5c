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


"""Package searchface/searchface.

Initialization file provides API for searchface.ru operations
available to the bot: uploading a photo, decoding the ranked
response and preparing it for display.
"""

from .decoder import decode
from .formatter import format_results
from .gateway import SearchGateway
from .schema import (
    MalformedResponse,
    MatchRecord,
    MAX_RESULTS,
    PresentableItem,
    SearchFaceError,
    UPSTREAM_ERROR_MAX_BYTES,
    UpstreamError,
)

__all__ = [
    "MAX_RESULTS",
    "MalformedResponse",
    "MatchRecord",
    "PresentableItem",
    "SearchFaceError",
    "SearchGateway",
    "UPSTREAM_ERROR_MAX_BYTES",
    "UpstreamError",
    "decode",
    "format_results",
    "search",
]


async def search(
    gateway: SearchGateway,
    file_path: str,
    max_items: int = MAX_RESULTS
) -> list[PresentableItem]:
    """Upload a photo and return the ranked, truncated album items."""
    raw = await gateway.upload(file_path)
    return format_results(decode(raw), max_items)
