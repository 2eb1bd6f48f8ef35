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

"""Tests for attendee model helpers and attendee listings"""

import datetime

import pytest
from django.core.exceptions import ValidationError

from gocongress.models.attendee import Attendee
from gocongress.tests.unit.base import BaseTestCase
from gocongress.utils.attendee import attendee_list, attendee_summary, get_order_by, get_vip_attendees


class TestAttendeeModel(BaseTestCase):
    """Test age, guardian and plan helpers of attendees"""

    def test_age_on(self):
        birth = datetime.date(2008, 8, 2)

        assert Attendee.age_on(birth, datetime.date(2026, 8, 1)) == 17
        assert Attendee.age_on(birth, datetime.date(2026, 8, 2)) == 18

    def test_age_uses_congress_start(self):
        attendee = self.create_attendee(birth_date=datetime.date(2008, 8, 2), guardian_full_name="Parent")

        assert attendee.age_in_years() == 17
        assert attendee.minor()

    def test_full_name_anonymity(self):
        attendee = self.create_attendee(anonymous=True)

        assert attendee.full_name() == "Honinbo Shusaku"
        assert attendee.full_name(respect_anonymity=True) == "Anonymous"

    def test_minor_needs_guardian(self):
        attendee = self.create_attendee(birth_date=datetime.date(2015, 1, 1))

        with pytest.raises(ValidationError) as exc_info:
            attendee.full_clean()

        assert "guardian_full_name" in exc_info.value.message_dict

    def test_not_own_guardian(self):
        attendee = self.create_attendee()
        attendee.guardian_attendee = attendee

        with pytest.raises(ValidationError) as exc_info:
            attendee.full_clean()

        assert "guardian_attendee" in exc_info.value.message_dict

    def test_rank_validated(self):
        attendee = self.create_attendee()
        attendee.rank = 8

        with pytest.raises(ValidationError) as exc_info:
            attendee.full_clean()

        assert "rank" in exc_info.value.message_dict

    def test_plan_helpers(self):
        category = self.create_category()
        plan = self.create_plan(category, max_quantity=3)
        disabled = self.create_plan(category, disabled=True)
        attendee = self.create_attendee()
        self.add_plan(attendee, plan, quantity=3)
        self.add_plan(attendee, disabled)

        assert attendee.has_plan(plan)
        assert attendee.get_plan_qty(plan.id) == 3
        assert attendee.get_plan_qty(12345) == 0

        attendee.clear_plan_category(category.id)

        assert list(attendee.plans.all()) == [disabled]

    def test_replace_all_activities_same_year(self):
        activity = self.create_activity()
        old = self.create_activity(year=2025)
        attendee = self.create_attendee()

        attendee.replace_all_activities([activity.id, old.id])

        assert list(attendee.activities.all()) == [activity]

    def test_deleting_attendee_removes_selections(self, mailoutbox):
        plan = self.create_plan()
        attendee = self.create_attendee()
        self.add_plan(attendee, plan)
        attendee_id = attendee.pk

        attendee.delete()

        assert not Attendee.all_objects.filter(pk=attendee_id).exists()
        assert plan.attendee_plans.count() == 0
        assert any("cancelled" in mail.subject for mail in mailoutbox)


class TestAttendeeList(BaseTestCase):
    """Test the public attendee list"""

    def setup_attendees(self):
        plan = self.create_plan()
        self.pro = self.create_attendee(given_name="cho", family_name="Chikun", rank=109)
        self.dan = self.create_attendee(given_name="Anna", family_name="Zhang", rank=3, country="CA")
        self.kyu = self.create_attendee(given_name="Bob", family_name="Ito", rank=-10, anonymous=True)
        self.non_player = self.create_attendee(given_name="Dana", family_name="Smith", rank=0)
        self.create_attendee(given_name="No", family_name="Plans", rank=5)
        for attendee in (self.pro, self.dan, self.kyu, self.non_player):
            self.add_plan(attendee, plan)

    def test_default_order_by_rank(self):
        self.setup_attendees()

        result = attendee_list(2026)

        assert result["attendees"] == [self.pro, self.dan, self.kyu, self.non_player]
        assert (result["pro_count"], result["dan_count"], result["kyu_count"]) == (1, 1, 1)
        assert result["opposite_direction"] == "desc"

    def test_case_insensitive_names_anonymous_apart(self):
        self.setup_attendees()

        result = attendee_list(2026, "given_name", "asc")

        assert result["attendees"] == [self.dan, self.pro, self.non_player, self.kyu]

    def test_descending(self):
        self.setup_attendees()

        result = attendee_list(2026, "given_name", "desc")

        assert result["attendees"] == [self.non_player, self.pro, self.dan, self.kyu]
        assert result["opposite_direction"] == "asc"

    def test_unknown_sort_falls_back(self):
        assert get_order_by("password; drop table", "asc")[1] == "-rank"
        assert get_order_by("rank", "desc") == ["-rank"]
        assert get_order_by("country", "sideways")[0] == "anonymous"

    def test_vip(self):
        self.setup_attendees()

        assert list(get_vip_attendees(2026)) == [self.pro]


class TestAttendeeSummary(BaseTestCase):
    def test_summary(self):
        plan = self.create_plan(name="Banquet")
        activity = self.create_activity(name="Zoo")
        attendee = self.create_attendee(special_request="Vegetarian")
        self.add_plan(attendee, plan)
        attendee.activities.add(activity)

        summary = attendee_summary(attendee)

        assert summary["full_name"] == "Honinbo Shusaku"
        assert summary["special_request"] == "Vegetarian"
        assert "comment" not in summary
        assert summary["plans"] == [{"plan": "Banquet", "quantity": 1, "dates": []}]
        assert summary["activities"] == ["Zoo"]
        assert summary["tournaments"] == []
