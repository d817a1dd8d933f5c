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

"""HTTP client for the searchface.ru upload endpoint."""

import logging
import os
from pathlib import Path

import aiohttp

from .schema import SEARCH_URL, UPLOAD_FIELD


logger = logging.getLogger(__name__)


class SearchGateway:
    """Uploads photos to the face search service.

    Attributes:
        search_url (str): endpoint accepting multipart photo uploads
        field_name (str): name of the multipart form field
        timeout (float): total request timeout in seconds
    """

    def __init__(
        self,
        search_url: str = SEARCH_URL,
        field_name: str = UPLOAD_FIELD,
        timeout: float = 30.0,
    ):
        """Store endpoint parameters; no connection is opened here."""
        self.search_url = search_url
        self.field_name = field_name
        self.timeout = timeout

    async def upload(self, file_path: str | os.PathLike) -> bytes:
        """POST a local photo as multipart form data.

        The body is returned unconditionally: the service signals
        failures inside the body, so classifying it is left
        to the decoder.

        Args:
            file_path: path to the photo on local storage

        Returns:
            bytes: raw response body

        Raises:
            FileNotFoundError: if file_path does not point to a file
            aiohttp.ClientError: on connection or protocol failures
            asyncio.TimeoutError: if the request exceeds the timeout
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"Photo not found: {path}")

        client_timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=client_timeout) as session:
            with path.open("rb") as photo:
                form = aiohttp.FormData()
                form.add_field(
                    self.field_name,
                    photo,
                    filename=path.name,
                    content_type="image/jpeg"
                )

                async with session.post(self.search_url, data=form) as resp:
                    body = await resp.read()
                    if resp.status != 200:
                        logger.warning(
                            f"Search service responded with status "
                            f"{resp.status} ({len(body)} bytes)"
                        )
                    return body
