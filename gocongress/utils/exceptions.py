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


class InvalidPageError(Exception):
    """Exception raised when an attendee form page name is not recognised.

    Attributes:
        page (str): The requested page name
    """

    def __init__(self, page: str) -> None:
        super().__init__(f"Invalid page: {page}")
        self.page = page


class YearNotFoundError(Exception):
    """Exception raised when a congress year is out of range or not configured.

    Attributes:
        year (int): The requested year
    """

    def __init__(self, year: int) -> None:
        super().__init__(f"Year {year} not found")
        self.year = year


class SplitDatetimeParserError(Exception):
    """Exception raised when a date/time pair submitted as two fields cannot be parsed.

    Attributes:
        field (str): Prefix of the date and time fields
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class PermissionError(Exception):
    """Exception raised when a member lacks required permissions."""

    pass
