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

from typing import TYPE_CHECKING, Any

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Sum
from django.db.models.constraints import UniqueConstraint
from django.utils.translation import gettext_lazy as _

from gocongress.models.base import BaseModel

if TYPE_CHECKING:
    from collections.abc import Iterable


class Event(BaseModel):
    """A part of the congress (main tournament, US Open, banquet...) attendees can be interested in."""

    year = models.IntegerField()

    name = models.CharField(max_length=100)

    evtdeparttime = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["name"]


class PlanCategory(BaseModel):
    year = models.IntegerField()

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="plan_categories")

    name = models.CharField(max_length=100)

    description = models.TextField(blank=True)

    mandatory = models.BooleanField(
        default=False,
        help_text=_("Attendees must select at least one plan in this category"),
    )

    show_on_reg_form = models.BooleanField(default=True)

    ordinal = models.IntegerField(default=0)

    class Meta:
        ordering = ["ordinal", "name"]


class Plan(BaseModel):
    year = models.IntegerField()

    plan_category = models.ForeignKey(PlanCategory, on_delete=models.CASCADE, related_name="plans")

    name = models.CharField(max_length=100)

    description = models.TextField(blank=True)

    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    age_min = models.IntegerField(default=0)

    age_max = models.IntegerField(null=True, blank=True)

    disabled = models.BooleanField(
        default=False,
        help_text=_("Disabled plans can no longer be selected, but attendees who already have them keep them"),
    )

    inventory = models.IntegerField(
        null=True,
        blank=True,
        help_text=_("Total number available, leave empty for unlimited"),
    )

    max_quantity = models.IntegerField(
        default=1,
        help_text=_("Maximum quantity a single attendee can select"),
    )

    daily = models.BooleanField(default=False, help_text=_("Attendees choose the dates they need"))

    cat_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["cat_order", "name"]

    def is_inventoried(self) -> bool:
        return self.inventory is not None

    def is_quantifiable(self) -> bool:
        return self.max_quantity > 1

    def appropriate_for_age(self, age: int) -> bool:
        if age < self.age_min:
            return False
        return self.age_max is None or age <= self.age_max

    def inventory_consumed(self, excluding_attendee_id: int | None = None) -> int:
        """Sum of quantities selected by attendees, optionally ignoring one attendee."""
        que = AttendeePlan.objects.filter(plan=self)
        if excluding_attendee_id:
            que = que.exclude(attendee_id=excluding_attendee_id)
        return que.aggregate(total=Sum("quantity"))["total"] or 0

    def inventory_available(self, excluding_attendee_id: int | None = None) -> int | None:
        """Remaining inventory, or None for plans without a capacity."""
        if not self.is_inventoried():
            return None
        return max(self.inventory - self.inventory_consumed(excluding_attendee_id), 0)

    @staticmethod
    def inventoried_plan_in(plans: Iterable[Plan]) -> bool:
        return any(plan.is_inventoried() for plan in plans)

    @staticmethod
    def quantifiable_plan_in(plans: Iterable[Plan]) -> bool:
        return any(plan.is_quantifiable() for plan in plans)


class AttendeePlan(models.Model):
    """The selection of a plan by an attendee, with the requested quantity."""

    attendee = models.ForeignKey("Attendee", on_delete=models.CASCADE, related_name="attendee_plans")

    plan = models.ForeignKey(Plan, on_delete=models.CASCADE, related_name="attendee_plans")

    quantity = models.IntegerField(default=1)

    created = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            UniqueConstraint(fields=["attendee", "plan"], name="unique_attendee_plan"),
        ]

    def __str__(self) -> str:
        return f"{self.plan} x{self.quantity}"

    def clean(self) -> None:
        """Check the quantity against the plan limits and the remaining inventory.

        Raises:
            ValidationError: Keyed on ``quantity`` when out of bounds
        """
        if self.quantity is None or self.quantity < 1:
            raise ValidationError({"quantity": _("must be at least 1")})

        if self.quantity > self.plan.max_quantity:
            raise ValidationError(
                {"quantity": _("cannot exceed %(max)d for %(plan)s") % {"max": self.plan.max_quantity, "plan": self.plan}}
            )

        available = self.plan.inventory_available(excluding_attendee_id=self.attendee_id)
        if available is not None and self.quantity > available:
            raise ValidationError(
                {"quantity": _("only %(available)d left for %(plan)s") % {"available": available, "plan": self.plan}}
            )

    def show(self) -> dict[str, Any]:
        return {
            "plan": self.plan.name,
            "quantity": self.quantity,
            "dates": [el.date for el in self.dates.all()],
        }


class AttendeePlanDate(models.Model):
    attendee_plan = models.ForeignKey(AttendeePlan, on_delete=models.CASCADE, related_name="dates")

    date = models.DateField()

    class Meta:
        ordering = ["date"]
        constraints = [
            UniqueConstraint(fields=["attendee_plan", "date"], name="unique_attendee_plan_date"),
        ]

    def __str__(self) -> str:
        return f"{self.attendee_plan} {self.date}"
