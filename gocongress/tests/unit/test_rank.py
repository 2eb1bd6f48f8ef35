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

import pytest

from gocongress.models.rank import NUMERIC_RANK_LIST, RANK_CHOICES, RANKS, is_dan, is_kyu, is_pro, rank_counts, rank_name


class TestRanks:
    """Test the rank table"""

    def test_table_bounds(self):
        assert RANKS[0] == ("Non-player", 0)
        assert RANKS[1] == ("9 pro", 109)
        assert RANKS[-1] == ("30 kyu", -30)
        assert len(NUMERIC_RANK_LIST) == 1 + 9 + 7 + 30

    def test_choices_are_code_label_pairs(self):
        assert (7, "7 dan") in RANK_CHOICES
        assert (-1, "1 kyu") in RANK_CHOICES

    def test_rank_name(self):
        assert rank_name(101) == "1 pro"
        assert rank_name(3) == "3 dan"
        assert rank_name(-12) == "12 kyu"

    def test_unknown_rank(self):
        with pytest.raises(KeyError):
            rank_name(8)

    def test_groups(self):
        assert is_pro(105)
        assert is_dan(1) and not is_dan(101)
        assert is_kyu(-30)
        assert not any(check(0) for check in (is_pro, is_dan, is_kyu))

    def test_counts(self):
        counts = rank_counts([102, 5, 1, -3, -20, -1, 0])

        assert counts == {"pro": 1, "dan": 2, "kyu": 3}
