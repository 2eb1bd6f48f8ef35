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

from django.db import models
from django.utils.translation import gettext_lazy as _

from gocongress.models.base import BaseModel


class Discount(BaseModel):
    year = models.IntegerField()

    name = models.CharField(max_length=100)

    amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    is_automatic = models.BooleanField(
        default=False,
        help_text=_("Automatic discounts are applied by the system and cannot be claimed by attendees"),
    )

    age_min = models.IntegerField(null=True, blank=True)

    age_max = models.IntegerField(null=True, blank=True)

    min_reg_date = models.DateField(
        null=True,
        blank=True,
        help_text=_("Only attendees registered before this date receive the discount"),
    )

    class Meta:
        ordering = ["name"]


class Activity(BaseModel):
    year = models.IntegerField()

    name = models.CharField(max_length=100)

    leave_time = models.DateTimeField()

    return_time = models.DateTimeField(null=True, blank=True)

    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    disabled = models.BooleanField(
        default=False,
        help_text=_("Disabled activities can no longer be selected, but attendees who already have them keep them"),
    )

    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["leave_time", "name"]


class TournamentOpenness(models.TextChoices):
    OPEN = "O", _("Open")
    INVITATIONAL = "I", _("Invitational")


class Tournament(BaseModel):
    year = models.IntegerField()

    name = models.CharField(max_length=100)

    openness = models.CharField(max_length=1, choices=TournamentOpenness.choices, default=TournamentOpenness.OPEN)

    show_attendee_notes_field = models.BooleanField(default=False)

    attendee_notes_field_label = models.CharField(max_length=100, blank=True)

    show_in_nav_menu = models.BooleanField(default=False)

    class Meta:
        ordering = ["name"]
