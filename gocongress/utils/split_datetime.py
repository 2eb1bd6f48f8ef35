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

from __future__ import annotations

import datetime
from typing import Any, Mapping

from django.utils.translation import gettext_lazy as _

from gocongress.utils.exceptions import SplitDatetimeParserError

DATE_FORMAT = "%Y-%m-%d"

TIME_FORMAT = "%I:%M %p"


def parse_split_datetime(params: Mapping[str, Any], prefix: str) -> datetime.datetime | None:
    """Combine a date field and a time field submitted separately into one datetime.

    The date is read from ``<prefix>_date`` as YYYY-MM-DD, the time from
    ``<prefix>_time`` in 12-hour format (e.g. "1:30 PM").

    Args:
        params: Submitted form data
        prefix: Common prefix of the two fields

    Returns:
        The combined datetime, or None when both fields are blank

    Raises:
        SplitDatetimeParserError: If only one of the fields is filled in, or
            either cannot be parsed
    """
    date_str = str(params.get(f"{prefix}_date") or "").strip()
    time_str = str(params.get(f"{prefix}_time") or "").strip()

    if not date_str and not time_str:
        return None

    label = prefix.replace("_", " ")
    if not date_str or not time_str:
        raise SplitDatetimeParserError(prefix, _("Please enter both a date and a time for %(label)s") % {"label": label})

    try:
        date = datetime.datetime.strptime(date_str, DATE_FORMAT).date()
    except ValueError as err:
        raise SplitDatetimeParserError(prefix, _("Invalid %(label)s date: %(value)s") % {"label": label, "value": date_str}) from err

    try:
        time = datetime.datetime.strptime(time_str.upper(), TIME_FORMAT).time()
    except ValueError as err:
        raise SplitDatetimeParserError(prefix, _("Invalid %(label)s time: %(value)s") % {"label": label, "value": time_str}) from err

    return datetime.datetime.combine(date, time)
