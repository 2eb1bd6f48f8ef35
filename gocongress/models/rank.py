# Go Congress registration
#
# This program is free software: you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation, either version 3 of the License, or (at your
# option) any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE. See the GNU Affero General Public License
# for more details.
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Go rank codes.

Ranks are stored as integers: 0 is a non-player, 101..109 are professional
ranks (1 pro .. 9 pro), 1..7 are amateur dan ranks and -1..-30 are kyu
ranks. The highest official amateur dan rank in the AGA is 7 dan.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

NON_PLAYER = 0

PRO_OFFSET = 100

RANKS: tuple[tuple[str, int], ...] = (
    ("Non-player", NON_PLAYER),
    *((f"{code - PRO_OFFSET} pro", code) for code in range(109, 100, -1)),
    *((f"{code} dan", code) for code in range(7, 0, -1)),
    *((f"{-code} kyu", code) for code in range(-1, -31, -1)),
)

NUMERIC_RANK_LIST: tuple[int, ...] = tuple(code for _label, code in RANKS)

RANK_CHOICES: tuple[tuple[int, str], ...] = tuple((code, label) for label, code in RANKS)

_RANK_NAMES = dict(RANK_CHOICES)


def rank_name(code: int) -> str:
    """Return the human label of a rank code, e.g. ``-3`` -> ``"3 kyu"``.

    Raises:
        KeyError: If the code is not a known rank
    """
    return _RANK_NAMES[code]


def is_pro(code: int) -> bool:
    return code > PRO_OFFSET


def is_dan(code: int) -> bool:
    return 0 < code < PRO_OFFSET


def is_kyu(code: int) -> bool:
    return code < 0


def rank_counts(codes: Iterable[int]) -> dict[str, int]:
    """Count players by rank group.

    Args:
        codes: Rank codes of the attendees to count

    Returns:
        Dictionary with ``pro``, ``dan`` and ``kyu`` counts. Non-players
        are not counted.
    """
    counter = Counter()
    for code in codes:
        if is_pro(code):
            counter["pro"] += 1
        elif is_dan(code):
            counter["dan"] += 1
        elif is_kyu(code):
            counter["kyu"] += 1
    return {group: counter[group] for group in ("pro", "dan", "kyu")}
