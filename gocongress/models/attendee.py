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
from typing import TYPE_CHECKING, ClassVar

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _
from phonenumber_field.modelfields import PhoneNumberField
from safedelete.models import HARD_DELETE

from gocongress.models.base import BaseModel
from gocongress.models.member import Member
from gocongress.models.miscellanea import Activity, Discount, Tournament
from gocongress.models.plan import AttendeePlan, Plan
from gocongress.models.rank import RANK_CHOICES
from gocongress.models.year import get_start_date

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gocongress.utils.plan_selection import PlanSelection

ADULT_AGE = 18


class GenderChoices(models.TextChoices):
    MALE = "m", _("Male")
    FEMALE = "f", _("Female")


class TshirtSize(models.TextChoices):
    NONE = "NO", _("None")
    YOUTH_SMALL = "YS", _("Youth Small")
    YOUTH_MEDIUM = "YM", _("Youth Medium")
    YOUTH_LARGE = "YL", _("Youth Large")
    ADULT_SMALL = "AS", _("Adult Small")
    ADULT_MEDIUM = "AM", _("Adult Medium")
    ADULT_LARGE = "AL", _("Adult Large")
    ADULT_XL = "1X", _("Adult XL")
    ADULT_XXL = "2X", _("Adult XXL")


class Attendee(BaseModel):
    """A person registered for one congress year, owned by a member account."""

    _safedelete_policy = HARD_DELETE

    member = models.ForeignKey(Member, on_delete=models.CASCADE, related_name="attendees")

    year = models.IntegerField()

    given_name = models.CharField(max_length=100, verbose_name=_("Given name"))

    family_name = models.CharField(max_length=100, verbose_name=_("Family name"))

    email = models.EmailField()

    phone = PhoneNumberField(blank=True, help_text=_("Remember to put the prefix at the beginning!"))

    birth_date = models.DateField()

    gender = models.CharField(max_length=1, choices=GenderChoices.choices)

    country = models.CharField(max_length=2, help_text=_("Two letter country code"))

    address_1 = models.CharField(max_length=200, blank=True)

    address_2 = models.CharField(max_length=200, blank=True)

    city = models.CharField(max_length=100, blank=True)

    state = models.CharField(max_length=100, blank=True)

    zip = models.CharField(max_length=20, blank=True)

    rank = models.IntegerField(choices=RANK_CHOICES)

    aga_id = models.IntegerField(null=True, blank=True, verbose_name=_("AGA ID"))

    anonymous = models.BooleanField(default=False, help_text=_("Hide my name from the public attendee list"))

    is_primary = models.BooleanField(default=False, editable=False)

    guardian_attendee = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="minors",
    )

    guardian_full_name = models.CharField(max_length=200, blank=True)

    roomate_request = models.TextField(blank=True)

    special_request = models.TextField(blank=True)

    tshirt_size = models.CharField(max_length=2, choices=TshirtSize.choices, blank=True)

    will_play_in_us_open = models.BooleanField(default=False)

    understand_minor = models.BooleanField(default=False)

    airport_arrival = models.DateTimeField(null=True, blank=True)

    airport_departure = models.DateTimeField(null=True, blank=True)

    # admin only
    comment = models.TextField(blank=True)

    minor_agreement_received = models.BooleanField(default=False)

    plans = models.ManyToManyField(Plan, through=AttendeePlan, related_name="attendees", blank=True)

    activities = models.ManyToManyField(Activity, related_name="attendees", blank=True)

    discounts = models.ManyToManyField(Discount, related_name="attendees", blank=True)

    tournaments = models.ManyToManyField(
        Tournament,
        through="AttendeeTournament",
        related_name="attendees",
        blank=True,
    )

    class Meta:
        ordering: ClassVar[list] = ["family_name", "given_name"]

    def __str__(self) -> str:
        return self.full_name()

    def full_name(self, respect_anonymity: bool = False) -> str:
        if respect_anonymity and self.anonymous:
            return str(_("Anonymous"))
        return f"{self.given_name} {self.family_name}"

    @staticmethod
    def age_on(birth_date: datetime.date, day: datetime.date) -> int:
        """Return the age in whole years someone born on birth_date has on day."""
        before_birthday = (day.month, day.day) < (birth_date.month, birth_date.day)
        return day.year - birth_date.year - int(before_birthday)

    def age_in_years(self) -> int:
        """Age on the first day of the congress."""
        return self.age_on(self.birth_date, get_start_date(self.year))

    def minor(self) -> bool:
        return self.age_in_years() < ADULT_AGE

    def clean(self) -> None:
        """Validate guardian information.

        Raises:
            ValidationError: When a minor has no guardian, or is their own guardian
        """
        if self.pk and self.guardian_attendee_id == self.pk:
            raise ValidationError({"guardian_attendee": _("An attendee cannot be their own guardian")})

        if not self.birth_date or not self.year:
            return

        if self.minor() and not self.guardian_attendee_id and not self.guardian_full_name:
            raise ValidationError(
                {"guardian_full_name": _("Attendees under %(age)d must name a guardian") % {"age": ADULT_AGE}}
            )

    def has_plan(self, plan: Plan) -> bool:
        return self.attendee_plans.filter(plan=plan).exists()

    def get_plan_qty(self, plan_id: int) -> int:
        attendee_plan = self.attendee_plans.filter(plan_id=plan_id).first()
        return attendee_plan.quantity if attendee_plan else 0

    def plan_selections(self) -> list[PlanSelection]:
        from gocongress.utils.plan_selection import PlanSelection

        que = self.attendee_plans.select_related("plan").prefetch_related("dates")
        return [PlanSelection.from_attendee_plan(attendee_plan) for attendee_plan in que]

    def clear_plan_category(self, category_id: int) -> None:
        """Remove the plans of a category, except disabled ones which could not be selected again."""
        self.attendee_plans.filter(plan__plan_category_id=category_id, plan__disabled=False).delete()

    def replace_all_activities(self, activity_ids: Iterable[int]) -> None:
        self.activities.set(Activity.objects.filter(pk__in=list(activity_ids), year=self.year))


class AttendeeTournament(models.Model):
    attendee = models.ForeignKey(Attendee, on_delete=models.CASCADE, related_name="attendee_tournaments")

    tournament = models.ForeignKey(Tournament, on_delete=models.CASCADE, related_name="attendee_tournaments")

    notes = models.CharField(max_length=50, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["attendee", "tournament"], name="unique_attendee_tournament"),
        ]

    def __str__(self) -> str:
        return f"{self.attendee} - {self.tournament}"
