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

from django.db import models
from django.utils.translation import gettext_lazy as _

from gocongress.models.base import BaseModel


class RegistrationPhase(models.TextChoices):
    OPEN = "open", _("Open")
    CLOSED = "closed", _("Closed")
    COMPLETE = "complete", _("Complete")
    CANCELED = "canceled", _("Canceled")


class Year(BaseModel):
    """One edition of the congress, identified by its calendar year."""

    year = models.IntegerField(unique=True)

    city = models.CharField(max_length=100)

    state = models.CharField(max_length=100, blank=True)

    date_range = models.CharField(max_length=100, help_text=_("Human readable dates, e.g. 'Aug 1 - 9'"))

    start_date = models.DateField()

    day_off_date = models.DateField(null=True, blank=True)

    ordinal_number = models.IntegerField(help_text=_("Which congress this is, e.g. 27 for the 27th"))

    registration_phase = models.CharField(
        max_length=10,
        choices=RegistrationPhase.choices,
        default=RegistrationPhase.CLOSED,
    )

    reply_to_email = models.EmailField(blank=True)

    timezone = models.CharField(max_length=100, default="Eastern Time (US & Canada)")

    twitter_url = models.URLField(blank=True)

    class Meta:
        ordering = ["-year"]

    def __str__(self) -> str:
        return f"{self.ordinal_number} - {self.city} {self.year}"

    def is_open(self) -> bool:
        return self.registration_phase == RegistrationPhase.OPEN


def get_start_date(year: int) -> datetime.date:
    """Return the first day of the congress held in the given year.

    Falls back to January 1st when the year has not been configured yet.
    """
    row = Year.objects.filter(year=year).only("start_date").first()
    if row:
        return row.start_date
    return datetime.date(year, 1, 1)
