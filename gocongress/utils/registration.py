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

import logging
from typing import TYPE_CHECKING, Any

from django.db.models import Q

from gocongress.models.miscellanea import Activity, Discount
from gocongress.models.plan import Plan, PlanCategory

if TYPE_CHECKING:
    from collections.abc import Iterable

    from django.db.models import QuerySet

    from gocongress.models.attendee import Attendee

logger = logging.getLogger(__name__)


def age_filter(age: int, prefix: str = "") -> Q:
    """Query filter matching plans whose age range includes the given age."""
    return Q(**{f"{prefix}age_min__lte": age}) & (
        Q(**{f"{prefix}age_max__isnull": True}) | Q(**{f"{prefix}age_max__gte": age})
    )


def get_year_plans(year: int) -> QuerySet[Plan]:
    """All plans of a year, disabled ones included, in form order."""
    return (
        Plan.objects.filter(year=year)
        .select_related("plan_category")
        .order_by("plan_category__ordinal", "plan_category__name", "cat_order", "name")
    )


def get_form_plans(attendee: Attendee, *, is_admin: bool) -> list[Plan]:
    """Plans to show on the registration form.

    Disabled plans are hidden unless the attendee already has them; admins
    see every plan.
    """
    plans = list(get_year_plans(attendee.year))
    if is_admin:
        return plans

    held_ids = set(attendee.attendee_plans.values_list("plan_id", flat=True)) if attendee.pk else set()
    return [plan for plan in plans if not plan.disabled or plan.id in held_ids]


def get_mandatory_categories(year: int) -> QuerySet[PlanCategory]:
    return PlanCategory.objects.filter(year=year, mandatory=True).order_by("ordinal", "name")


def reg_form_categories(year: int, age: int) -> QuerySet[PlanCategory]:
    """Categories shown on the registration form with at least one plan suitable for the age."""
    que = PlanCategory.objects.filter(year=year, show_on_reg_form=True)
    que = que.filter(age_filter(age, prefix="plans__"), plans__deleted__isnull=True)
    return que.distinct().order_by("ordinal", "name")


def get_category_plans(category: PlanCategory, age: int) -> QuerySet[Plan]:
    """Enabled plans of a category an attendee of the given age can choose."""
    return category.plans.filter(age_filter(age), disabled=False).order_by("cat_order", "name")


def get_year_activities(year: int) -> QuerySet[Activity]:
    return Activity.objects.filter(year=year).order_by("leave_time", "name")


def get_claimable_discounts(year: int) -> QuerySet[Discount]:
    return Discount.objects.filter(year=year, is_automatic=False)


def parse_ids(values: Iterable[Any] | None) -> list[int]:
    """Convert submitted ids to ints, skipping blanks and anything non numeric.

    Checkbox lists include an empty string for unchecked boxes, those are
    simply ignored.
    """
    ids = []
    for value in values or []:
        try:
            parsed = int(str(value).strip())
        except (TypeError, ValueError):
            continue
        if parsed > 0 and parsed not in ids:
            ids.append(parsed)
    return ids


def claim_discounts(attendee: Attendee, discount_ids: Iterable[Any] | None) -> list[Discount]:
    """Replace the discounts claimed by an attendee.

    Only non-automatic discounts of the attendee's year can be claimed;
    automatic ones in the list are silently dropped.

    Args:
        attendee: Attendee claiming the discounts
        discount_ids: Submitted discount ids, possibly with blank entries

    Returns:
        The discounts now attached to the attendee
    """
    requested = parse_ids(discount_ids)
    discounts = list(get_claimable_discounts(attendee.year).filter(pk__in=requested))

    ignored = set(requested) - {discount.id for discount in discounts}
    if ignored:
        logger.debug("Ignoring unclaimable discounts %s for attendee %s", sorted(ignored), attendee.pk)

    # automatic discounts are managed by the system and stay attached
    automatic = list(attendee.discounts.filter(is_automatic=True))
    attendee.discounts.set(automatic + discounts)
    return discounts
