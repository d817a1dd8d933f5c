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

"""Conversion of decoded match records into presentable album items."""

from collections.abc import Sequence

from .schema import MAX_RESULTS, MatchRecord, PresentableItem


def format_score(score: float) -> str:
    """Render a score in fixed-point notation with six decimals."""
    return f"{score:f}"


def format_results(
    records: Sequence[MatchRecord],
    max_items: int = MAX_RESULTS
) -> list[PresentableItem]:
    """Keep the first max_items records in upstream order.

    Records are neither re-ranked nor de-duplicated.

    Raises:
        ValueError: if max_items is negative
    """
    if max_items < 0:
        raise ValueError(f"max_items must be non-negative, got {max_items}")

    return [
        PresentableItem(
            display_score=format_score(record.score),
            image_url=record.image_url,
        )
        for record in records[:max_items]
    ]
