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

import datetime

from django.core.management.base import BaseCommand

from gocongress.models.year import RegistrationPhase, Year

YEARS = [
    {
        "year": 2011,
        "city": "Santa Barbara",
        "state": "CA",
        "date_range": "Jul 30 - Aug 7",
        "start_date": datetime.date(2011, 7, 30),
        "day_off_date": datetime.date(2011, 8, 3),
        "ordinal_number": 27,
        "registration_phase": RegistrationPhase.COMPLETE,
        "reply_to_email": "registrar@gocongress.org",
        "timezone": "Pacific Time (US & Canada)",
    },
    {
        "year": 2012,
        "city": "Black Mountain",
        "state": "North Carolina",
        "date_range": "August 4 - 12",
        "start_date": datetime.date(2012, 8, 4),
        "day_off_date": datetime.date(2012, 8, 8),
        "ordinal_number": 28,
        "registration_phase": RegistrationPhase.OPEN,
        "reply_to_email": "arlene@usgocongress12.org",
        "timezone": "Eastern Time (US & Canada)",
        "twitter_url": "https://twitter.com/#!/GoCongress12",
    },
    {
        "year": 2013,
        "city": "Seattle",
        "state": "Washington",
        "date_range": "TBD",
        "start_date": datetime.date(2013, 8, 4),
        "day_off_date": datetime.date(2013, 8, 8),
        "ordinal_number": 29,
        "registration_phase": RegistrationPhase.CLOSED,
        "reply_to_email": "szimmerman@ctipc.com",
        "timezone": "Pacific Time (US & Canada)",
        "twitter_url": "https://twitter.com/#!/GoCongress13",
    },
    {
        "year": 2014,
        "city": "New York",
        "state": "NY",
        "date_range": "August 9-17",
        "start_date": datetime.date(2014, 8, 9),
        "day_off_date": datetime.date(2014, 8, 13),
        "ordinal_number": 30,
        "registration_phase": RegistrationPhase.CLOSED,
        "reply_to_email": "rcristal3@netscape.net",
        "timezone": "Eastern Time (US & Canada)",
    },
    {
        "year": 2015,
        "city": "Saint Paul",
        "state": "MN",
        "date_range": "August 1 - 9",
        "start_date": datetime.date(2015, 8, 1),
        "day_off_date": datetime.date(2015, 8, 5),
        "ordinal_number": 31,
        "registration_phase": RegistrationPhase.CLOSED,
        "reply_to_email": "webmaster@gocongress.org",
        "timezone": "Central Time (US & Canada)",
    },
]


class Command(BaseCommand):
    help = "Seed the congress years"

    def handle(self, *args: tuple, **options: dict) -> None:  # noqa: ARG002
        """Create the historical congress years, updating the ones already present."""
        for values in YEARS:
            values = dict(values)
            year = values.pop("year")
            _obj, created = Year.objects.update_or_create(year=year, defaults=values)
            self.stdout.write(f"{'Created' if created else 'Updated'} {year}")

        self.stdout.write("All done.")
