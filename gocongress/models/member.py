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

from typing import TYPE_CHECKING

from django.contrib.auth.models import User
from django.db import models
from django.utils.translation import gettext_lazy as _

from gocongress.models.base import BaseModel

if TYPE_CHECKING:
    from gocongress.models.attendee import Attendee


class MemberRole(models.TextChoices):
    ADMIN = "A", _("Admin")
    STAFF = "S", _("Staff")
    USER = "U", _("User")


class Member(BaseModel):
    """The account that signs in and owns one or more attendees for a year."""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="member")

    email = models.EmailField()

    year = models.IntegerField()

    role = models.CharField(max_length=1, choices=MemberRole.choices, default=MemberRole.USER)

    class Meta:
        ordering = ["email"]

    def __str__(self) -> str:
        return self.email

    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN

    def primary_attendee(self) -> Attendee | None:
        return self.attendees.filter(is_primary=True).first()
