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
from typing import Any

from django.db import transaction

from gocongress.models.miscellanea import Activity, Discount, Tournament
from gocongress.models.plan import Event, Plan, PlanCategory
from gocongress.models.year import get_start_date

logger = logging.getLogger(__name__)


def copy_class(source_year: int, target_year: int, model_class: type, **filters: Any) -> dict[int, Any]:
    """Clone the objects of a model from one year to another.

    Args:
        source_year: Year to copy from
        target_year: Year to copy to
        model_class: Model to copy, it must have a ``year`` field
        **filters: Extra filters restricting the copied objects

    Returns:
        Mapping of source object ids to their clones
    """
    clones = {}
    for source_object in model_class.objects.filter(year=source_year, **filters):
        clones[source_object.id] = source_object.make_clone(attrs={"year": target_year})
    return clones


def copy_year_catalog(from_year: int, to_year: int) -> dict[str, int]:
    """Copy the catalog of a congress into a new year.

    Events, plan categories, plans, activities, tournaments and the
    discounts attendees can claim are cloned; the catalog already in the
    target year is left untouched. Activity times are moved by the
    difference between the two congress start dates.

    Returns:
        Number of objects copied per model name
    """
    if from_year == to_year:
        raise ValueError("Cannot copy a catalog onto itself")

    shift = get_start_date(to_year) - get_start_date(from_year)

    with transaction.atomic():
        events = copy_class(from_year, to_year, Event)

        categories = {}
        for category in PlanCategory.objects.filter(year=from_year):
            categories[category.id] = category.make_clone(
                attrs={"year": to_year, "event": events.get(category.event_id, category.event)}
            )

        plans = {}
        for plan in Plan.objects.filter(year=from_year):
            plans[plan.id] = plan.make_clone(attrs={"year": to_year, "plan_category": categories[plan.plan_category_id]})

        activities = {}
        for activity in Activity.objects.filter(year=from_year):
            activities[activity.id] = activity.make_clone(
                attrs={
                    "year": to_year,
                    "leave_time": activity.leave_time + shift,
                    "return_time": activity.return_time + shift if activity.return_time else None,
                }
            )

        tournaments = copy_class(from_year, to_year, Tournament)
        discounts = copy_class(from_year, to_year, Discount, is_automatic=False)

    counts = {
        "events": len(events),
        "plan_categories": len(categories),
        "plans": len(plans),
        "activities": len(activities),
        "tournaments": len(tournaments),
        "discounts": len(discounts),
    }
    logger.info("Copied catalog from %s to %s: %s", from_year, to_year, counts)
    return counts
