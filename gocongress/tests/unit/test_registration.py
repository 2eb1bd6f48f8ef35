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

"""Tests for the Registration form orchestrator"""

import datetime
from unittest.mock import patch

import pytest
from django.core.exceptions import NON_FIELD_ERRORS
from django.db import IntegrityError

from gocongress.forms.registration import AttendeeForm, Registration
from gocongress.tests.unit.base import BaseTestCase


def plans_param(*pairs):
    return {str(plan.id): qty for plan, qty in pairs}


class TestRegistrationMandatoryCategories(BaseTestCase):
    """Test that mandatory categories need a plan, for everyone"""

    def test_missing_mandatory_plan(self):
        category = self.create_category(name="Registration fee", mandatory=True)
        self.create_plan(category)
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert not registration.submit({"plans": {}})
        assert len(registration.base_errors()) == 1
        assert "Registration fee" in registration.base_errors()[0]

    def test_admins_are_not_exempt(self):
        category = self.create_category(name="Registration fee", mandatory=True)
        self.create_plan(category)
        attendee = self.create_attendee()

        registration = Registration(self.create_admin(), attendee)

        assert not registration.submit({})
        assert len(registration.base_errors()) == 1

    def test_selecting_mandatory_plan(self):
        category = self.create_category(mandatory=True)
        plan = self.create_plan(category)
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert registration.submit({"plans": plans_param((plan, "1"))})
        assert list(attendee.plans.all()) == [plan]
        assert attendee.plans.count() == 1


class TestRegistrationDisabledPlans(BaseTestCase):
    """Test the rules on disabled plans"""

    def test_member_cannot_add_disabled_plan(self):
        plan = self.create_plan(name="Old dorm", disabled=True)
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert not registration.submit({"plans": plans_param((plan, "1"))})
        assert any("Old dorm" in error for error in registration.base_errors())
        assert attendee.attendee_plans.count() == 0

    def test_admin_can_add_disabled_plan(self):
        plan = self.create_plan(disabled=True)
        attendee = self.create_attendee()

        registration = Registration(self.create_admin(), attendee)

        assert registration.submit({"plans": plans_param((plan, "1"))})
        assert attendee.has_plan(plan)

    def test_member_cannot_remove_disabled_plan(self):
        category = self.create_category()
        disabled = self.create_plan(category, name="Old dorm", disabled=True)
        enabled = self.create_plan(category, name="New dorm")
        attendee = self.create_attendee()
        self.add_plan(attendee, disabled)

        registration = Registration(attendee.member, attendee)

        assert not registration.submit({"plans": plans_param((disabled, "0"), (enabled, "1"))})
        assert any("Old dorm" in error for error in registration.base_errors())
        assert attendee.has_plan(disabled)
        assert not attendee.has_plan(enabled)

    def test_admin_can_remove_disabled_plan(self):
        category = self.create_category()
        disabled = self.create_plan(category, disabled=True)
        enabled = self.create_plan(category)
        attendee = self.create_attendee()
        self.add_plan(attendee, disabled)

        registration = Registration(self.create_admin(), attendee)

        assert registration.submit({"plans": plans_param((disabled, "0"), (enabled, "1"))})
        assert not attendee.has_plan(disabled)
        assert attendee.has_plan(enabled)

    def test_keeping_disabled_plan(self):
        disabled = self.create_plan(disabled=True, max_quantity=2)
        attendee = self.create_attendee()
        self.add_plan(attendee, disabled)

        registration = Registration(attendee.member, attendee)

        assert registration.submit({"plans": plans_param((disabled, "2"))})
        assert attendee.get_plan_qty(disabled.id) == 2


class TestRegistrationPlans(BaseTestCase):
    """Test plan quantities, inventory and dates"""

    def test_resubmission_replaces(self):
        first = self.create_plan()
        second = self.create_plan()
        attendee = self.create_attendee()
        params = {"plans": plans_param((first, "1"), (second, "1"))}

        assert Registration(attendee.member, attendee).submit(params)
        assert Registration(attendee.member, attendee).submit(params)

        assert attendee.attendee_plans.count() == 2

        assert Registration(attendee.member, attendee).submit({"plans": plans_param((second, "1"))})
        assert list(attendee.plans.all()) == [second]

    def test_unparsable_quantities_are_zero(self):
        plan = self.create_plan()
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert registration.submit({"plans": {str(plan.id): "several", "12345": "1"}})
        assert attendee.attendee_plans.count() == 0

    def test_quantity_above_maximum(self):
        plan = self.create_plan(name="Banquet", max_quantity=2)
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert not registration.submit({"plans": plans_param((plan, "3"))})
        errors = registration.base_errors()
        assert len(errors) == 1
        assert errors[0].startswith("Banquet: quantity")

    def test_inventory_exhausted(self):
        plan = self.create_plan(inventory=1)
        other = self.create_attendee(member=self.create_member(), given_name="Other")
        self.add_plan(other, plan)
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert not registration.submit({"plans": plans_param((plan, "1"))})
        assert "only 0 left" in registration.base_errors()[0]

    def test_own_quantity_does_not_consume_inventory(self):
        plan = self.create_plan(inventory=1)
        attendee = self.create_attendee()
        self.add_plan(attendee, plan)

        registration = Registration(attendee.member, attendee)

        assert registration.submit({"plans": plans_param((plan, "1"))})

    def test_daily_plan_without_dates(self):
        category = self.create_category(name="Lodging", mandatory=True)
        plan = self.create_plan(category, name="Day pass", daily=True)
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert registration.submit({"plans": {str(plan.id): "1"}}), dict(registration.errors)
        attendee_plan = attendee.attendee_plans.get()
        assert attendee_plan.quantity == 1
        assert not attendee_plan.dates.exists()

    def test_daily_plan_dates_saved(self):
        plan = self.create_plan(daily=True)
        attendee = self.create_attendee()
        raw = {str(plan.id): {"qty": "1", "dates": ["2026-08-03", "2026-08-02", "bad"]}}

        assert Registration(attendee.member, attendee).submit({"plans": raw})

        attendee_plan = attendee.attendee_plans.get()
        assert [el.date for el in attendee_plan.dates.all()] == [datetime.date(2026, 8, 2), datetime.date(2026, 8, 3)]

        raw = {str(plan.id): {"qty": "1", "dates": ["2026-08-05"]}}
        assert Registration(attendee.member, attendee).submit({"plans": raw})

        attendee_plan = attendee.attendee_plans.get()
        assert [el.date for el in attendee_plan.dates.all()] == [datetime.date(2026, 8, 5)]

    @patch("gocongress.models.plan.AttendeePlanDate.objects.bulk_create", side_effect=IntegrityError("dates"))
    def test_failed_save_leaves_nothing_behind(self, mock_bulk_create):
        kept_plan = self.create_plan(name="Kept")
        daily_plan = self.create_plan(daily=True)
        kept_activity = self.create_activity()
        new_activity = self.create_activity()
        attendee = self.create_attendee()
        self.add_plan(attendee, kept_plan)
        attendee.activities.add(kept_activity)

        registration = Registration(attendee.member, attendee)
        params = {
            "registration": {"given_name": "Changed"},
            "activity_ids": [str(kept_activity.id), str(new_activity.id)],
            "plans": {str(daily_plan.id): {"qty": "1", "dates": ["2026-08-02"]}},
        }

        with pytest.raises(IntegrityError):
            registration.submit(params)

        mock_bulk_create.assert_called_once()
        attendee.refresh_from_db()
        assert attendee.given_name == "Honinbo"
        assert list(attendee.activities.all()) == [kept_activity]
        assert [el.plan_id for el in attendee.attendee_plans.all()] == [kept_plan.id]


class TestRegistrationDiscounts(BaseTestCase):
    def test_claim_discount_ignoring_blanks(self):
        discount = self.create_discount()
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert registration.submit({"discount_ids": [discount.id, ""]})
        assert list(attendee.discounts.all()) == [discount]

    def test_automatic_discount_silently_filtered(self):
        automatic = self.create_discount(name="Youth", is_automatic=True)
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert registration.submit({"discount_ids": [str(automatic.id)]})
        assert automatic not in attendee.discounts.all()
        assert registration.errors == {}

    def test_discounts_untouched_without_key(self):
        discount = self.create_discount()
        attendee = self.create_attendee()
        attendee.discounts.add(discount)

        assert Registration(attendee.member, attendee).submit({})

        assert list(attendee.discounts.all()) == [discount]


class TestRegistrationActivities(BaseTestCase):
    def test_select_activities(self):
        first = self.create_activity()
        second = self.create_activity()
        attendee = self.create_attendee()

        assert Registration(attendee.member, attendee).submit({"activity_ids": [str(first.id), "", second.id]})

        assert set(attendee.activities.all()) == {first, second}

    def test_member_cannot_add_disabled_activity(self):
        activity = self.create_activity(disabled=True)
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert not registration.submit({"activity_ids": [activity.id]})
        assert registration.base_errors() == ["You cannot add or remove an activity that is disabled"]
        assert attendee.activities.count() == 0

    def test_admin_can_add_disabled_activity(self):
        activity = self.create_activity(disabled=True)
        attendee = self.create_attendee()

        assert Registration(self.create_admin(), attendee).submit({"activity_ids": [activity.id]})
        assert list(attendee.activities.all()) == [activity]


class TestRegistrationAttendeeFields(BaseTestCase):
    """Test the attendee attributes staged through the form"""

    def test_only_allowed_fields_are_set(self):
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert registration.submit({"registration": {"given_name": "Go", "comment": "vip", "year": 1999}})
        attendee.refresh_from_db()
        assert attendee.given_name == "Go"
        assert attendee.comment == ""
        assert attendee.year == 2026

    def test_field_and_business_errors_together(self):
        category = self.create_category(name="Registration fee", mandatory=True)
        self.create_plan(category)
        attendee = self.create_attendee()

        registration = Registration(attendee.member, attendee)

        assert not registration.submit({"registration": {"gender": "x"}})
        assert "gender" in registration.errors
        assert NON_FIELD_ERRORS in registration.errors
        attendee.refresh_from_db()
        assert attendee.gender == "m"

    def test_minor_must_understand_policy(self):
        attendee = self.create_attendee(birth_date=datetime.date(2015, 3, 1), guardian_full_name="Parent Name")

        registration = Registration(attendee.member, attendee)

        assert not registration.submit({"registration": {}})
        assert "understand_minor" in registration.errors

        assert registration.submit({"registration": {"understand_minor": True}})
        attendee.refresh_from_db()
        assert attendee.understand_minor

    def test_adult_does_not_need_agreement(self):
        form = AttendeeForm(data={}, instance=self.create_attendee())
        form.is_valid()

        assert "understand_minor" not in form.errors

    def test_summary_mail_sent(self, mailoutbox):
        attendee = self.create_attendee()
        plan = self.create_plan(name="Banquet")

        assert Registration(attendee.member, attendee).submit({"plans": plans_param((plan, "1"))})

        summaries = [mail for mail in mailoutbox if "Registration updated" in mail.subject]
        assert len(summaries) == 1
        assert summaries[0].subject.startswith("[Go Congress 2026]")
        assert "Banquet" in summaries[0].alternatives[0][0]
        assert summaries[0].to == [attendee.email]


class TestRegistrationProjections(BaseTestCase):
    """Test the read only helpers used by the form"""

    def test_form_plans_hide_disabled(self):
        enabled = self.create_plan()
        disabled = self.create_plan(disabled=True)
        held = self.create_plan(disabled=True)
        attendee = self.create_attendee()
        self.add_plan(attendee, held)

        assert Registration(attendee.member, attendee).form_plans() == [enabled, held]
        assert len(Registration(self.create_admin(), attendee).form_plans()) == 3
        assert disabled not in Registration(attendee.member, attendee).form_plans()

    def test_plans_by_category(self):
        lodging = self.create_category(name="Lodging", ordinal=2)
        meals = self.create_category(name="Meals", ordinal=1)
        dorm = self.create_plan(lodging)
        breakfast = self.create_plan(meals)
        attendee = self.create_attendee()

        grouped = Registration(attendee.member, attendee).plans_by_category()

        assert list(grouped) == [meals, lodging]
        assert grouped[lodging] == [dorm]
        assert grouped[meals] == [breakfast]

    def test_availability_and_quantity_flags(self):
        attendee = self.create_attendee()
        self.create_plan()

        registration = Registration(attendee.member, attendee)
        assert not registration.show_availability()
        assert not registration.show_quantity_instructions()

        self.create_plan(inventory=10, max_quantity=4)
        registration = Registration(attendee.member, attendee)
        assert registration.show_availability()
        assert registration.show_quantity_instructions()

    def test_attendee_number(self):
        attendee = self.create_attendee()

        assert Registration(attendee.member, attendee).attendee_number() == 2

    def test_guardian_name(self):
        guardian = self.create_attendee(given_name="Go", family_name="Seigen")
        minor = self.create_attendee(birth_date=datetime.date(2014, 1, 1), guardian_attendee=guardian)

        assert Registration(minor.member, minor).guardian_name() == "Go Seigen"
        assert Registration(guardian.member, guardian).guardian_name() is None

    def test_adults(self):
        adult = self.create_attendee()
        self.create_attendee(given_name="Kid", birth_date=datetime.date(2014, 1, 1), guardian_attendee=adult)
        hidden = self.create_attendee(given_name="Hidden", anonymous=True)

        registration = Registration(adult.member, adult)

        assert registration.adults() == [{"label": "Honinbo Shusaku", "value": adult.id}]
        assert registration.adults_anonymous_of_member() == [{"label": "Hidden Shusaku", "value": hidden.id}]
