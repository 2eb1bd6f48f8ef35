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
from typing import TYPE_CHECKING, Any, ClassVar

from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.db import transaction
from django.forms.models import model_to_dict
from django.forms.utils import ErrorDict, ErrorList
from django.utils.translation import gettext_lazy as _

from gocongress.forms.base import MyForm
from gocongress.mail.registration import send_registration_summary
from gocongress.models.attendee import ADULT_AGE, Attendee
from gocongress.models.plan import AttendeePlan, AttendeePlanDate, Plan
from gocongress.models.year import get_start_date
from gocongress.utils.attendee import get_adults, get_anonymous_adults_of_member
from gocongress.utils.changes import FindsChangesToDisabledActivities, FindsChangesToDisabledPlans
from gocongress.utils.plan_selection import PlanSelection
from gocongress.utils.registration import (
    claim_discounts,
    get_form_plans,
    get_mandatory_categories,
    get_year_activities,
    get_year_plans,
    parse_ids,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from django.db.models import QuerySet

    from gocongress.models.member import Member
    from gocongress.models.miscellanea import Activity
    from gocongress.models.plan import PlanCategory

logger = logging.getLogger(__name__)

# Attendee attributes an attendee (or their account) may set through the
# registration form. Anything else, like `year` or the admin only fields,
# is dropped from the submitted data.
ATTENDEE_FIELDS = (
    "aga_id",
    "anonymous",
    "birth_date",
    "country",
    "email",
    "family_name",
    "gender",
    "given_name",
    "guardian_attendee",
    "guardian_full_name",
    "phone",
    "rank",
    "roomate_request",
    "special_request",
    "tshirt_size",
    "understand_minor",
    "will_play_in_us_open",
)


class AttendeeForm(MyForm):
    """Attendee attributes of the registration form."""

    class Meta:
        model = Attendee
        fields = ATTENDEE_FIELDS

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)

        # Guardians are chosen among the attendees of the same congress
        if "guardian_attendee" in self.fields:
            que = Attendee.objects.filter(year=self.instance.year)
            if self.instance.pk:
                que = que.exclude(pk=self.instance.pk)
            self.fields["guardian_attendee"].queryset = que

    def clean(self) -> dict[str, Any]:
        """Require the minor agreement when the attendee is under 18 on the first congress day."""
        cleaned_data = super().clean()

        birth_date = cleaned_data.get("birth_date")
        if birth_date and self.instance.year:
            age = Attendee.age_on(birth_date, get_start_date(self.instance.year))
            if age < ADULT_AGE and not cleaned_data.get("understand_minor"):
                self.add_error(
                    "understand_minor",
                    _("Please confirm that you understand the policy for attendees under %(age)d")
                    % {"age": ADULT_AGE},
                )

        return cleaned_data


class Registration:
    """The registration of one attendee across the pages of the edit form.

    Collects the submitted attendee attributes, plan quantities and activity
    choices, validates them together and persists them in one transaction.
    Validation never raises: every problem found is collected in
    ``errors``, keyed by field, with business rule errors under
    ``NON_FIELD_ERRORS``.

    Args:
        current_member: Member submitting the form, used for the admin exemptions
        attendee: Persisted attendee being edited
    """

    attendee_fields: ClassVar[tuple[str, ...]] = ATTENDEE_FIELDS

    def __init__(self, current_member: Member, attendee: Attendee) -> None:
        self.current_member = current_member
        self.attendee = attendee
        self.errors = ErrorDict()
        self.attendee_form = None
        self.activity_selections = list(attendee.activities.values_list("id", flat=True)) if attendee.pk else []
        self.plan_selections = attendee.plan_selections() if attendee.pk else []
        self.discount_selections = None
        self._form_plans = None

    # accessors

    @property
    def year(self) -> int:
        return self.attendee.year

    @property
    def id(self) -> int | None:
        return self.attendee.pk

    def is_admin(self) -> bool:
        return self.current_member.is_admin()

    def full_name(self) -> str:
        return self.attendee.full_name()

    def minor(self) -> bool:
        return self.attendee.minor()

    def persisted(self) -> bool:
        return self.attendee.pk is not None

    def guardian_name(self) -> str | None:
        if self.attendee.guardian_attendee:
            return self.attendee.guardian_attendee.full_name()
        return self.attendee.guardian_full_name or None

    def activities(self) -> QuerySet[Activity]:
        return get_year_activities(self.year)

    def adults(self) -> list[dict[str, Any]]:
        """Adult attendees of the year, as autocomplete label/value pairs for the guardian field."""
        return [{"label": el.full_name(respect_anonymity=True), "value": el.id} for el in get_adults(self.year)]

    def adults_anonymous_of_member(self) -> list[dict[str, Any]]:
        """Anonymous adults of the same account, who are hidden from ``adults``."""
        return [
            {"label": el.full_name(), "value": el.id}
            for el in get_anonymous_adults_of_member(self.year, self.attendee.member_id)
        ]

    def attendee_number(self) -> int:
        """Position of this attendee among the attendees of its account, for display."""
        return self.attendee.member.attendees.count() + 1

    # plans shown on the form

    def all_plans(self) -> list[Plan]:
        """Every plan of the year, disabled ones included."""
        return list(get_year_plans(self.year))

    def form_plans(self) -> list[Plan]:
        """Plans to show on the form: disabled plans only when the attendee already has them."""
        if self._form_plans is None:
            self._form_plans = get_form_plans(self.attendee, is_admin=self.is_admin())
        return self._form_plans

    def plans_by_category(self) -> dict[PlanCategory, list[Plan]]:
        grouped = {}
        for plan in self.form_plans():
            grouped.setdefault(plan.plan_category, []).append(plan)
        return grouped

    def show_availability(self) -> bool:
        return Plan.inventoried_plan_in(self.form_plans())

    def show_quantity_instructions(self) -> bool:
        return Plan.quantifiable_plan_in(self.form_plans())

    # submission

    def submit(self, params: Mapping[str, Any] | None) -> bool:
        """Stage, validate and persist a submission of the registration form.

        Args:
            params: Submitted data with the optional keys ``activity_ids``,
                ``plans``, ``registration`` and ``discount_ids``. Missing
                ``activity_ids`` and ``plans`` mean nothing is selected.

        Returns:
            True if everything was saved, False if validation failed. On
            failure the staged attendee attributes stay on ``attendee``
            and the problems are in ``errors``.
        """
        params = params or {}

        self.activity_selections = parse_ids(params.get("activity_ids"))
        self.plan_selections = PlanSelection.parse_params(params.get("plans"), self.all_plans())
        if "discount_ids" in params:
            self.discount_selections = params.get("discount_ids") or []

        self.attendee_form = AttendeeForm(data=self.attendee_data(params.get("registration")), instance=self.attendee)

        if not self.is_valid():
            logger.debug("Registration of attendee %s rejected: %s", self.attendee.pk, dict(self.errors))
            return False

        self.save()
        return True

    def attendee_data(self, registration_params: Mapping[str, Any] | None) -> dict[str, Any]:
        """Current attendee values overlaid with the allowed submitted ones."""
        data = model_to_dict(self.attendee, fields=self.attendee_fields)
        for key, value in (registration_params or {}).items():
            if key in self.attendee_fields:
                data[key] = value
        return data

    def is_valid(self) -> bool:
        """Run every check and report whether no error was found.

        Checks do not short-circuit, so a single submission reports all of
        its problems at once.
        """
        self.errors = ErrorDict()

        if self.attendee_form is None:
            self.attendee_form = AttendeeForm(data=self.attendee_data(None), instance=self.attendee)
        self.attendee_form.is_valid()
        self.merge_errors(self.attendee_form.error_messages_by_field())

        selected = self.selected_plans()
        self.validate_mandatory_plan_categories(selected)
        self.validate_disabled_plans(self.persisted_plan_selections(), selected)
        self.validate_models(self.selected_attendee_plans())
        self.validate_activities()

        return not self.errors

    def save(self) -> None:
        """Persist the attendee, activities, plans and claimed discounts atomically.

        Database errors are not caught: validation has already screened the
        recoverable problems.
        """
        with transaction.atomic():
            self.attendee_form.save()
            self.persist_activities()
            self.persist_plans()
            if self.discount_selections is not None:
                claim_discounts(self.attendee, self.discount_selections)

        logger.info("Saved registration of attendee %s", self.attendee.pk)
        send_registration_summary(self.attendee)

    # errors

    def add_error(self, field: str | None, message: str) -> None:
        key = field or NON_FIELD_ERRORS
        self.errors.setdefault(key, ErrorList()).append(str(message))

    def merge_errors(self, errors: Mapping[str, Iterable[str]]) -> None:
        for field, messages in errors.items():
            for message in messages:
                self.add_error(field, message)

    def base_errors(self) -> list[str]:
        return list(self.errors.get(NON_FIELD_ERRORS, []))

    # selections

    def selected_plans(self) -> list[PlanSelection]:
        return [selection for selection in self.plan_selections if selection.qty > 0]

    def selected_attendee_plans(self) -> list[AttendeePlan]:
        return [selection.to_attendee_plan(self.attendee) for selection in self.selected_plans()]

    def persisted_plan_selections(self) -> list[PlanSelection]:
        if not self.attendee.pk:
            return []
        return self.attendee.plan_selections()

    def persisted_activity_ids(self) -> list[int]:
        if not self.attendee.pk:
            return []
        return list(self.attendee.activities.values_list("id", flat=True))

    def selected_dates(self, plan: Plan) -> list:
        for selection in self.plan_selections:
            if selection.plan.id == plan.id:
                return selection.dates
        return []

    # validations

    def validate_mandatory_plan_categories(self, selections: Iterable[PlanSelection]) -> None:
        """Every mandatory category of the year needs a selected plan. Applies to admins too."""
        selected_category_ids = {selection.plan.plan_category_id for selection in selections if selection.qty > 0}
        for category in get_mandatory_categories(self.year):
            if category.id not in selected_category_ids:
                self.add_error(
                    None,
                    _("Please select at least one plan in %(category)s") % {"category": category.name},
                )

    def validate_disabled_plans(self, before: list[PlanSelection], after: list[PlanSelection]) -> None:
        """Disabled plans cannot be added or removed, except by admins."""
        if self.is_admin():
            return
        changes = FindsChangesToDisabledPlans(before, after)
        for message in changes.removal_errors + changes.addition_errors:
            self.add_error(None, message)

    def validate_models(self, attendee_plans: Iterable[AttendeePlan]) -> None:
        for attendee_plan in attendee_plans:
            try:
                attendee_plan.full_clean(exclude=["attendee"], validate_unique=False, validate_constraints=False)
            except ValidationError as err:
                for field, messages in err.message_dict.items():
                    for message in messages:
                        self.add_error(None, f"{attendee_plan.plan.name}: {field}: {message}")

    def validate_activities(self) -> None:
        """Disabled activities cannot be added or removed, except by admins."""
        if self.is_admin():
            return
        changes = FindsChangesToDisabledActivities(
            self.persisted_activity_ids(),
            self.activity_selections,
            self.activities(),
        )
        if not changes.valid():
            self.add_error(None, _("You cannot add or remove an activity that is disabled"))

    # persistence

    def persist_activities(self) -> None:
        self.attendee.replace_all_activities(self.activity_selections)

    def persist_plans(self) -> None:
        """Replace the attendee plans with the selected ones, recreating their dates."""
        selected = {selection.plan.id: selection for selection in self.selected_plans()}

        self.attendee.attendee_plans.exclude(plan_id__in=list(selected)).delete()

        for selection in selected.values():
            attendee_plan, _created = AttendeePlan.objects.update_or_create(
                attendee=self.attendee,
                plan=selection.plan,
                defaults={"quantity": selection.qty},
            )
            attendee_plan.dates.all().delete()
            AttendeePlanDate.objects.bulk_create(
                [AttendeePlanDate(attendee_plan=attendee_plan, date=date) for date in self.selected_dates(selection.plan)]
            )
