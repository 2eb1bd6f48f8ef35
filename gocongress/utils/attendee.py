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
from typing import TYPE_CHECKING, Any

from django.db.models import Case, Exists, IntegerField, OuterRef, Value, When
from django.db.models.functions import Lower

from gocongress.models.attendee import ADULT_AGE, Attendee
from gocongress.models.plan import AttendeePlan
from gocongress.models.rank import rank_counts
from gocongress.models.year import get_start_date

if TYPE_CHECKING:
    from django.db.models import QuerySet

SORTABLE_COLUMNS = ("given_name", "family_name", "rank", "created", "country", "state")

# Sorting by these could reveal hints about anonymous attendees
UNSAFE_FOR_ANONYMOUS = ("given_name", "family_name", "country", "state")

CASE_INSENSITIVE_COLUMNS = ("given_name", "family_name")

# Contact details a new attendee inherits from the primary attendee of the account
INHERITED_FIELDS = ("phone", "address_1", "address_2", "city", "state", "zip", "country")


def adult_birth_date_limit(year: int) -> datetime.date:
    """Latest birth date of an attendee who is an adult on the first day of the congress."""
    start = get_start_date(year)
    try:
        return start.replace(year=start.year - ADULT_AGE)
    except ValueError:
        # congress starting on February 29th
        return start.replace(year=start.year - ADULT_AGE, day=28)


def get_adults(year: int) -> QuerySet[Attendee]:
    """Adult attendees of a year who are not anonymous, candidates as guardians."""
    return Attendee.objects.filter(
        year=year,
        anonymous=False,
        birth_date__lte=adult_birth_date_limit(year),
    ).order_by("family_name", "given_name")


def get_anonymous_adults_of_member(year: int, member_id: int) -> QuerySet[Attendee]:
    return Attendee.objects.filter(
        year=year,
        member_id=member_id,
        anonymous=True,
        birth_date__lte=adult_birth_date_limit(year),
    ).order_by("family_name", "given_name")


def with_at_least_one_plan(que: QuerySet[Attendee]) -> QuerySet[Attendee]:
    return que.filter(Exists(AttendeePlan.objects.filter(attendee=OuterRef("pk"))))


def get_order_by(sort: str | None, direction: str | None) -> list[Any]:
    """Translate the requested sort column and direction to safe ORDER BY terms.

    Unknown columns fall back to rank, strongest first, with non-players last.
    """
    if sort not in SORTABLE_COLUMNS:
        non_player = Case(When(rank=0, then=Value(1)), default=Value(0), output_field=IntegerField())
        return [non_player, "-rank"]

    expression = Lower(sort) if sort in CASE_INSENSITIVE_COLUMNS else sort
    if direction == "desc":
        expression = expression.desc() if hasattr(expression, "desc") else f"-{expression}"

    order_by = [expression]
    if sort in UNSAFE_FOR_ANONYMOUS:
        order_by.insert(0, "anonymous")
    return order_by


def attendee_list(year: int, sort: str | None = None, direction: str | None = "asc") -> dict[str, Any]:
    """Public attendee list of a congress year.

    Args:
        year: Congress year
        sort: Column to sort on, one of SORTABLE_COLUMNS
        direction: ``asc`` or ``desc``, anything else sorts ascending

    Returns:
        Dictionary with the ordered ``attendees``, the ``opposite_direction``
        to use in column links, and ``pro_count``, ``dan_count`` and
        ``kyu_count`` player counts
    """
    if direction not in ("asc", "desc"):
        direction = "asc"

    que = with_at_least_one_plan(Attendee.objects.filter(year=year))
    attendees = list(que.order_by(*get_order_by(sort, direction)))

    counts = rank_counts(el.rank for el in attendees)
    return {
        "attendees": attendees,
        "opposite_direction": "desc" if direction == "asc" else "asc",
        "pro_count": counts["pro"],
        "dan_count": counts["dan"],
        "kyu_count": counts["kyu"],
    }


def get_vip_attendees(year: int) -> QuerySet[Attendee]:
    """Professional players of a year, strongest first."""
    return Attendee.objects.filter(year=year, rank__gt=100).order_by("-rank")


def init_new_attendee(target_member, year: int) -> Attendee:
    """Unsaved attendee for an account, prefilled from the account and its primary attendee."""
    attendee = Attendee(
        member=target_member,
        year=year,
        email=target_member.email,
        is_primary=not target_member.attendees.exists(),
    )

    primary = target_member.primary_attendee()
    if primary:
        for field in INHERITED_FIELDS:
            setattr(attendee, field, getattr(primary, field))

    return attendee


def attendee_summary(attendee: Attendee) -> dict[str, Any]:
    """Printable summary of an attendee: filled in attributes and selected plans."""
    summary = attendee.as_dict(many_to_many=False)
    summary["full_name"] = attendee.full_name()
    summary["plans"] = [el.show() for el in attendee.attendee_plans.select_related("plan")]
    summary["activities"] = list(attendee.activities.values_list("name", flat=True))
    summary["tournaments"] = list(attendee.tournaments.values_list("name", flat=True))
    return summary
