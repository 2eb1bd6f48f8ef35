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
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from django.utils.dateparse import parse_date

from gocongress.models.plan import AttendeePlan

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from gocongress.models.attendee import Attendee
    from gocongress.models.plan import Plan

logger = logging.getLogger(__name__)


def parse_quantity(value: Any) -> int:
    """Convert a submitted quantity to an int, treating anything unparsable as 0."""
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def parse_dates(values: Any) -> list[datetime.date]:
    """Parse submitted ISO dates, dropping invalid entries and duplicates."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]

    dates = []
    for value in values:
        if isinstance(value, datetime.date):
            parsed = value
        else:
            try:
                parsed = parse_date(str(value).strip())
            except ValueError:
                parsed = None
        if parsed and parsed not in dates:
            dates.append(parsed)
    return sorted(dates)


@dataclass
class PlanSelection:
    """One row of the plans form: a plan, the requested quantity and, for daily plans, the dates."""

    plan: Plan
    qty: int = 0
    dates: list[datetime.date] = field(default_factory=list)

    @classmethod
    def parse_params(cls, raw_map: Mapping[str, Any] | None, known_plans: Iterable[Plan]) -> list[PlanSelection]:
        """Build one selection per known plan from the submitted form data.

        Each plan is looked up under its id. The value can be a bare
        quantity or a mapping with ``qty`` and ``dates`` keys. Plans missing
        from the form get a quantity of 0, so that removals can be detected;
        keys that do not match a known plan are ignored.

        Args:
            raw_map: Submitted plan fields, keyed by plan id
            known_plans: The plan catalog to read quantities for

        Returns:
            Selections in catalog order, including zero quantities
        """
        raw_map = raw_map or {}
        selections = []
        for plan in known_plans:
            value = raw_map.get(str(plan.id), raw_map.get(plan.id))
            if hasattr(value, "get"):
                qty = parse_quantity(value.get("qty"))
                dates = parse_dates(value.get("dates")) if plan.daily else []
            else:
                qty = parse_quantity(value)
                dates = []
            selections.append(cls(plan, qty, dates))

        logger.debug("Parsed %d plan selections from %d submitted keys", len(selections), len(raw_map))
        return selections

    @classmethod
    def from_attendee_plan(cls, attendee_plan: AttendeePlan) -> PlanSelection:
        dates = [el.date for el in attendee_plan.dates.all()] if attendee_plan.pk else []
        return cls(attendee_plan.plan, attendee_plan.quantity, dates)

    def to_attendee_plan(self, attendee: Attendee) -> AttendeePlan:
        return AttendeePlan(attendee=attendee, plan=self.plan, quantity=self.qty)

    def is_selected(self) -> bool:
        return self.qty > 0

    def same_plan(self, other: PlanSelection) -> bool:
        return self.plan.id == other.plan.id
