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

"""Defines searchface client constants, schema and errors."""

from dataclasses import dataclass


SEARCH_URL = "http://searchface.ru/request/"
UPLOAD_FIELD = "upl"

# searchface.ru answers with a short plain-text message instead of
# a JSON array when the search fails. Not schema-validated upstream.
UPSTREAM_ERROR_MAX_BYTES = 30

# Telegram media groups carry at most 10 items
MAX_RESULTS = 10


@dataclass(frozen=True)
class MatchRecord:
    """One ranked candidate returned by the search service."""
    score: float
    image_url: str


@dataclass(frozen=True)
class PresentableItem:
    """Match record prepared for rendering into a chat album."""
    display_score: str
    image_url: str

    @property
    def caption(self) -> str:  # noqa: D102
        return f"Score {self.display_score}"


class SearchFaceError(Exception):
    """Base class for search service errors."""
    def __init__(  # noqa: D107
        self,
        message: str,
        code: str = "SEARCHFACE_ERROR"
    ):
        super().__init__(message)
        self.code = code


class UpstreamError(SearchFaceError):
    """Raised when the service reports a failure via a short payload."""
    def __init__(self, detail: str):  # noqa: D107
        super().__init__(detail, "UPSTREAM_ERROR")
        self.detail = detail


class MalformedResponse(SearchFaceError):
    """Raised when the response body has an unexpected structure."""
    def __init__(  # noqa: D107
        self,
        detail: str = "Unexpected search service response"
    ):
        super().__init__(detail, "MALFORMED_RESPONSE")
