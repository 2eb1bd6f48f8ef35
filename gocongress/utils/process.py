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
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from gocongress.utils.exceptions import InvalidPageError
from gocongress.utils.registration import parse_ids, reg_form_categories

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gocongress.models.attendee import Attendee
    from gocongress.models.plan import PlanCategory

logger = logging.getLogger(__name__)

# Pages of the attendee edit form, besides the per-category plan pages
PAGES = ("basics", "events", "wishes", "tournaments", "activities", "admin", "terminus")

PLANS_PAGE = "plans"


def assert_valid_page(page: str) -> None:
    """Raise InvalidPageError unless page is one of the attendee form pages."""
    if page not in PAGES:
        raise InvalidPageError(page)


@dataclass(frozen=True)
class Step:
    """Identifies a page of the registration flow.

    Plan pages are identified by their category, every other page by name only.
    """

    page: str
    category: PlanCategory | None = None

    def __str__(self) -> str:
        if self.category is not None:
            return f"{self.page}/{self.category.id}"
        return self.page


class RegistrationProcess:
    """Computes the page to show after a page of the attendee form has been saved.

    The flow goes basics, events, then one plan page per category of the
    events the attendee is interested in, and ends on the terminus page.
    Pages reached from the terminus (wishes, tournaments...) return to it.
    """

    def __init__(self, attendee: Attendee) -> None:
        self.attendee = attendee

    def categories(self, events_of_interest: Iterable[Any] | None) -> list[PlanCategory]:
        """Plan categories of the registration form belonging to the events of interest."""
        event_ids = parse_ids(events_of_interest)
        que = reg_form_categories(self.attendee.year, self.attendee.age_in_years())
        return list(que.filter(event_id__in=event_ids))

    def next_page(
        self,
        page: str | None,
        category: PlanCategory | None,
        events_of_interest: Iterable[Any] | None,
    ) -> Step:
        """Return the step following the given page or plan category.

        Args:
            page: Name of the page just saved, None when a plan page was saved
            category: Category of the plan page just saved, if any
            events_of_interest: Event ids the attendee picked on the events page

        Returns:
            The next step of the flow

        Raises:
            InvalidPageError: If page is not a known page name
        """
        if category is not None:
            categories = self.categories(events_of_interest)
            ids = [el.id for el in categories]
            if category.id in ids:
                position = ids.index(category.id) + 1
                if position < len(categories):
                    return Step(PLANS_PAGE, categories[position])
            return Step("terminus")

        assert_valid_page(page)

        if page == "basics":
            return Step("events")

        if page == "events":
            categories = self.categories(events_of_interest)
            if categories:
                return Step(PLANS_PAGE, categories[0])
            logger.debug("No plan categories for the events of attendee %s", self.attendee.pk)

        return Step("terminus")
