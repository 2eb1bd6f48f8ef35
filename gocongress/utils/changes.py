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

"""Detect additions and removals of disabled plans and activities.

Disabled items are grandfathered: an attendee who already holds one keeps
it, but nobody can newly select it or drop it through the registration
form. These helpers only compare two selection sets, they never touch the
database beyond reading the objects they are given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.utils.translation import gettext_lazy as _

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from gocongress.models.miscellanea import Activity
    from gocongress.models.plan import Plan
    from gocongress.utils.plan_selection import PlanSelection


def _selected_plans(selections: Iterable[PlanSelection]) -> dict[int, Plan]:
    return {selection.plan.id: selection.plan for selection in selections if selection.qty > 0}


class FindsChangesToDisabledPlans:
    """Compare persisted plan selections with submitted ones.

    Args:
        before: Selections currently stored for the attendee
        after: Selections submitted by the form
    """

    def __init__(self, before: Sequence[PlanSelection], after: Sequence[PlanSelection]) -> None:
        self.before = _selected_plans(before)
        self.after = _selected_plans(after)

    def removed_plans(self) -> list[Plan]:
        return [plan for plan_id, plan in self.before.items() if plan_id not in self.after]

    def added_plans(self) -> list[Plan]:
        return [plan for plan_id, plan in self.after.items() if plan_id not in self.before]

    @property
    def removal_errors(self) -> list[str]:
        return [
            str(_("You cannot remove %(plan)s, because it is disabled") % {"plan": plan.name})
            for plan in self.removed_plans()
            if plan.disabled
        ]

    @property
    def addition_errors(self) -> list[str]:
        return [
            str(_("You cannot add %(plan)s, because it is disabled") % {"plan": plan.name})
            for plan in self.added_plans()
            if plan.disabled
        ]

    def valid(self) -> bool:
        return not self.removal_errors and not self.addition_errors


class FindsChangesToDisabledActivities:
    """Compare persisted activity ids with submitted ones.

    Args:
        before: Activity ids currently stored for the attendee
        after: Activity ids submitted by the form
        activities: Activity catalog used to look up the disabled flag
    """

    def __init__(self, before: Iterable[int], after: Iterable[int], activities: Iterable[Activity]) -> None:
        self.before = set(before)
        self.after = set(after)
        self.disabled_ids = {activity.id for activity in activities if activity.disabled}

    @property
    def added(self) -> set[int]:
        return self.after - self.before

    @property
    def removed(self) -> set[int]:
        return self.before - self.after

    def valid(self) -> bool:
        changed = self.added | self.removed
        return not (changed & self.disabled_ids)
