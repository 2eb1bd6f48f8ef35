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

import datetime
from io import StringIO

import pytest
from django.core.management import call_command

from gocongress.models.miscellanea import Activity, Discount, Tournament
from gocongress.models.plan import Event, Plan, PlanCategory
from gocongress.models.year import RegistrationPhase, Year
from gocongress.tests.unit.base import BaseTestCase
from gocongress.utils.copy import copy_year_catalog


class TestCopyYearCatalog(BaseTestCase):
    """Test cloning a congress catalog into a new year"""

    def test_copy(self):
        self.create_year(year=2025, start_date=datetime.date(2025, 8, 2), ordinal_number=41)
        self.create_year(year=2026, start_date=datetime.date(2026, 8, 1))
        event = self.create_event(year=2025)
        category = self.create_category(event, year=2025, name="Lodging", mandatory=True)
        self.create_plan(category, year=2025, name="Dorm", inventory=40)
        self.create_activity(year=2025, name="Zoo", leave_time=datetime.datetime(2025, 8, 6, 9, 0))
        self.create_tournament(year=2025, name="Masters")
        self.create_discount(year=2025, name="Early bird")
        self.create_discount(year=2025, name="Youth", is_automatic=True)

        counts = copy_year_catalog(2025, 2026)

        assert counts == {
            "events": 1,
            "plan_categories": 1,
            "plans": 1,
            "activities": 1,
            "tournaments": 1,
            "discounts": 1,
        }
        new_plan = Plan.objects.get(year=2026)
        assert new_plan.name == "Dorm"
        assert new_plan.inventory == 40
        assert new_plan.plan_category.year == 2026
        assert new_plan.plan_category.mandatory
        assert new_plan.plan_category.event == Event.objects.get(year=2026)
        assert PlanCategory.objects.filter(year=2025).count() == 1
        assert Activity.objects.get(year=2026).leave_time == datetime.datetime(2026, 8, 5, 9, 0)
        assert Tournament.objects.filter(year=2026, name="Masters").exists()
        assert list(Discount.objects.filter(year=2026).values_list("name", flat=True)) == ["Early bird"]

    def test_same_year(self):
        with pytest.raises(ValueError):
            copy_year_catalog(2026, 2026)


class TestSeedYears(BaseTestCase):
    def test_seed(self):
        out = StringIO()

        call_command("seed_years", stdout=out)
        call_command("seed_years", stdout=out)

        assert Year.objects.count() == 5
        saint_paul = Year.objects.get(year=2015)
        assert saint_paul.city == "Saint Paul"
        assert saint_paul.ordinal_number == 31
        assert Year.objects.get(year=2012).registration_phase == RegistrationPhase.OPEN
        assert "Updated 2015" in out.getvalue()
