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

"""Decoder for searchface.ru response bodies.

The service answers with an array of keyless, positionally nested
tuples:

    [[score, [[image_url, ...], ...], ...], ...]

Every field is addressed by its position alone. The outer shape is
decoded strictly: a body that is not an array of arrays is rejected
as a whole. The inner fields are decoded tolerantly: a missing or
mistyped score becomes 0.0 and a missing image URL becomes "".
"""

from dataclasses import dataclass
import json
from typing import Any

from .schema import (
    MalformedResponse,
    MatchRecord,
    UPSTREAM_ERROR_MAX_BYTES,
    UpstreamError,
)


@dataclass(frozen=True)
class FieldPath:
    """Tolerant positional lookup of a single record field."""
    indices: tuple[int, ...]
    types: tuple[type, ...]
    default: Any

    def extract(self, item: list) -> Any:
        """Walk the indices through nested arrays.

        Returns the default whenever a step is not an array, is too
        short, or the leaf value has an unexpected type.
        """
        value: Any = item
        for index in self.indices:
            if not isinstance(value, list) or index >= len(value):
                return self.default
            value = value[index]
        # bool is an int subclass, but JSON true/false is not a score
        if isinstance(value, bool) or not isinstance(value, self.types):
            return self.default
        return value


SCORE_PATH = FieldPath(indices=(0,), types=(int, float), default=0.0)
IMAGE_URL_PATH = FieldPath(indices=(1, 0, 0), types=(str,), default="")

MIN_RECORD_LENGTH = 2


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _parse_json(raw: bytes) -> Any:
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise MalformedResponse(f"Response is not valid JSON: {e}") from e


def _to_score(value: int | float) -> float:
    try:
        return float(value)
    except OverflowError:
        return SCORE_PATH.default


def _decode_record(position: int, item: Any) -> MatchRecord:
    if not isinstance(item, list) or len(item) < MIN_RECORD_LENGTH:
        raise MalformedResponse(
            f"Result #{position} is not an array of at least "
            f"{MIN_RECORD_LENGTH} elements"
        )
    return MatchRecord(
        score=_to_score(SCORE_PATH.extract(item)),
        image_url=IMAGE_URL_PATH.extract(item),
    )


def decode(raw: bytes) -> list[MatchRecord]:
    """Decode a raw response body into ranked match records.

    Args:
        raw: unmodified body of the search service response

    Returns:
        list[MatchRecord]: records in the order the service ranked them

    Raises:
        UpstreamError: the body is short enough to be a service
            status message rather than a result array
        MalformedResponse: the body is not a JSON array of arrays
    """
    if len(raw) <= UPSTREAM_ERROR_MAX_BYTES:
        raise UpstreamError(raw.decode("utf-8", errors="replace"))

    payload = _parse_json(raw)
    if not isinstance(payload, list):
        raise MalformedResponse(
            f"Expected a JSON array, got {type(payload).__name__}"
        )

    return [
        _decode_record(position, item)
        for position, item in enumerate(payload)
    ]
