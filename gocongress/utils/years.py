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

from django.conf import settings as conf_settings

from gocongress.models.year import Year
from gocongress.utils.exceptions import YearNotFoundError

FIRST_YEAR = 2011

LAST_YEAR = 2100


def get_year(year: int | str | None = None) -> Year:
    """Load the congress year requested, or the configured current year.

    Args:
        year: Year number, possibly as a string from request parameters

    Returns:
        The matching Year row

    Raises:
        YearNotFoundError: If the value is not a year in range or it is not configured
    """
    if year in (None, ""):
        year = conf_settings.CONGRESS_YEAR

    try:
        year = int(year)
    except (TypeError, ValueError) as err:
        raise YearNotFoundError(year) from err

    # guards against garbage in request parameters
    if not FIRST_YEAR <= year <= LAST_YEAR:
        raise YearNotFoundError(year)

    row = Year.objects.filter(year=year).first()
    if not row:
        raise YearNotFoundError(year)
    return row


def get_years_range() -> range:
    """All years shown in the footer navigation."""
    return range(FIRST_YEAR, conf_settings.LATEST_YEAR + 1)
