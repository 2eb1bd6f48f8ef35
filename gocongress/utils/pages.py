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
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from django.core.exceptions import ValidationError
from django.db import transaction
from django.forms import modelform_factory
from django.forms.models import model_to_dict
from django.utils.translation import gettext_lazy as _

from gocongress.forms.base import MyForm
from gocongress.forms.registration import AttendeeForm, Registration
from gocongress.models.attendee import Attendee, AttendeeTournament
from gocongress.models.miscellanea import Tournament, TournamentOpenness
from gocongress.models.plan import AttendeePlan
from gocongress.utils.attendee import init_new_attendee
from gocongress.utils.changes import FindsChangesToDisabledActivities
from gocongress.utils.exceptions import PermissionError, SplitDatetimeParserError
from gocongress.utils.plan_selection import parse_quantity
from gocongress.utils.process import RegistrationProcess, Step, assert_valid_page
from gocongress.utils.registration import (
    claim_discounts,
    get_category_plans,
    get_year_activities,
    parse_ids,
    reg_form_categories,
)
from gocongress.utils.split_datetime import parse_split_datetime
from gocongress.utils.years import get_year

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping

    from gocongress.models.member import Member
    from gocongress.models.plan import PlanCategory

logger = logging.getLogger(__name__)

EVENTS_SESSION_KEY = "events_of_interest"

# Attendee attributes each page can set, on top of its own associations
PAGE_FIELDS = {
    "events": ("airport_arrival", "airport_departure"),
    "wishes": ("roomate_request", "special_request", "tshirt_size"),
    "admin": ("comment", "minor_agreement_received"),
}

# Pages reached from the account page, that confirm the update
NOTICE_PAGES = ("activities", "tournaments")


@dataclass
class PageResult:
    """Outcome of saving one page of the attendee form."""

    attendee: Attendee
    success: bool
    errors: list[str] = field(default_factory=list)
    next_step: Step | None = None
    notice: str | None = None


def assert_can_edit(member: Member, attendee: Attendee) -> None:
    """Members can edit their own attendees, admins any attendee.

    Raises:
        PermissionError: If the member is neither the owner nor an admin
    """
    if attendee.member_id != member.id and not member.is_admin():
        raise PermissionError()


def flatten_errors(errors: Mapping[str, Any]) -> list[str]:
    """Form errors as a flat list of messages, prefixed by the field when bound to one."""
    messages = []
    for field_name, field_errors in errors.items():
        for message in field_errors:
            if field_name == "__all__":
                messages.append(str(message))
            else:
                messages.append(f"{field_name}: {message}")
    return messages


def stage_form(attendee: Attendee, fields: tuple[str, ...], data: Mapping[str, Any], form_class=None) -> MyForm:
    """Bind a form for some attendee fields, the ones not submitted keeping their current value."""
    if form_class is None:
        form_class = modelform_factory(Attendee, form=MyForm, fields=fields)
    initial = model_to_dict(attendee, fields=fields)
    for key in fields:
        if key in data:
            initial[key] = data[key]
    return form_class(data=initial, instance=attendee)


def create_attendee(member: Member, target_member: Member, data: Mapping[str, Any], year: int | None = None) -> PageResult:
    """Create a new attendee under an account from the basics page.

    The first attendee of an account becomes its primary attendee, later
    ones inherit the contact details of the primary one.

    Args:
        member: Member submitting the form
        target_member: Account the attendee is created under
        data: Submitted attendee attributes
        year: Congress year, the configured one when not given

    Returns:
        The result, with the next page of the flow on success

    Raises:
        PermissionError: If a non-admin creates an attendee under another account
        YearNotFoundError: If the year is not configured
    """
    if target_member.id != member.id and not member.is_admin():
        raise PermissionError()

    year_row = get_year(year)
    attendee = init_new_attendee(target_member, year_row.year)

    form = stage_form(attendee, AttendeeForm.Meta.fields, data, form_class=AttendeeForm)
    if not form.is_valid():
        return PageResult(attendee, False, flatten_errors(form.errors))

    form.save()
    logger.info("Created attendee %s under member %s", attendee.pk, target_member.pk)
    return PageResult(attendee, True, next_step=RegistrationProcess(attendee).next_page("basics", None, []))


def update_attendee_page(
    member: Member,
    attendee: Attendee,
    page: str | None,
    params: Mapping[str, Any] | None,
    session: MutableMapping[str, Any],
) -> PageResult:
    """Save one page of the attendee edit form.

    The basics page goes through the full registration validation; the
    other pages each update their own associations and a few attributes.
    Everything a page writes is rolled back when any error is found.

    Args:
        member: Member submitting the form
        attendee: Attendee being edited
        page: Page name, ``basics`` when blank
        params: Submitted data. For the basics page, the registration
            mapping; otherwise ``attendee`` holds the page fields and
            ``event_ids`` the events of interest
        session: Session storage, keeps the events of interest between pages

    Returns:
        The result of the update

    Raises:
        InvalidPageError: If the page name is unknown
        PermissionError: If the member cannot edit the attendee, or a
            non-admin submits the admin page
    """
    page = page or "basics"
    assert_valid_page(page)
    assert_can_edit(member, attendee)
    if page == "admin" and not member.is_admin():
        raise PermissionError()

    params = params or {}
    events_of_interest = session.get(EVENTS_SESSION_KEY)

    if page == "basics":
        registration = Registration(member, attendee)
        if not registration.submit(params):
            return PageResult(attendee, False, flatten_errors(registration.errors))
        return PageResult(attendee, True, next_step=RegistrationProcess(attendee).next_page(page, None, events_of_interest))

    data = params.get("attendee") or {}
    errors = []

    with transaction.atomic():
        if page == "events":
            event_ids = parse_ids(params.get("event_ids"))
            if event_ids:
                events_of_interest = event_ids
            else:
                errors.append(str(_("Please pick at least one event")))
            data = {**data, **_parse_airport_datetimes(data, errors)}
        elif page == "wishes":
            claim_discounts(attendee, data.get("discount_ids"))
        elif page == "tournaments":
            errors.extend(_replace_tournaments(attendee, TournamentOpenness.OPEN, data))
        elif page == "activities":
            errors.extend(_replace_activities(member, attendee, data))
        elif page == "admin":
            errors.extend(_replace_tournaments(attendee, TournamentOpenness.INVITATIONAL, data))

        form = None
        if page in PAGE_FIELDS:
            form = stage_form(attendee, PAGE_FIELDS[page], data)
            if not form.is_valid():
                errors.extend(flatten_errors(form.errors))

        if errors:
            transaction.set_rollback(True)
            logger.debug("Update of page %s for attendee %s rejected: %s", page, attendee.pk, errors)
            return PageResult(attendee, False, errors)

        if form is not None:
            form.save()

    if page == "events":
        session[EVENTS_SESSION_KEY] = events_of_interest

    notice = str(_("Attendee updated")) if page in NOTICE_PAGES else None
    next_step = RegistrationProcess(attendee).next_page(page, None, events_of_interest)
    return PageResult(attendee, True, next_step=next_step, notice=notice)


def _parse_airport_datetimes(data: Mapping[str, Any], errors: list[str]) -> dict[str, Any]:
    parsed = {}
    try:
        for prefix in ("airport_arrival", "airport_departure"):
            parsed[prefix] = parse_split_datetime(data, prefix)
    except SplitDatetimeParserError as err:
        errors.append(str(err))
    return parsed


def _replace_tournaments(attendee: Attendee, openness: str, data: Mapping[str, Any]) -> list[str]:
    """Replace the enrollments of an attendee in the tournaments of one openness.

    Notes are stored only for tournaments asking for them, read from
    ``trn_<id>_notes``.
    """
    errors = []
    attendee.attendee_tournaments.filter(tournament__openness=openness).delete()

    que = Tournament.objects.filter(year=attendee.year, openness=openness)
    for tournament in que.filter(pk__in=parse_ids(data.get("tournament_id_list"))):
        enrollment = AttendeeTournament(attendee=attendee, tournament=tournament)
        if tournament.show_attendee_notes_field:
            enrollment.notes = data.get(f"trn_{tournament.id}_notes") or ""
        try:
            enrollment.full_clean()
        except ValidationError as err:
            errors.extend(f"{tournament.name}: {message}" for message in err.messages)
            continue
        enrollment.save()
    return errors


def _replace_activities(member: Member, attendee: Attendee, data: Mapping[str, Any]) -> list[str]:
    activity_ids = parse_ids(data.get("activity_id_list"))

    if not member.is_admin():
        before = list(attendee.activities.values_list("id", flat=True))
        changes = FindsChangesToDisabledActivities(before, activity_ids, get_year_activities(attendee.year))
        if not changes.valid():
            return [str(_("You cannot add or remove an activity that is disabled"))]

    attendee.replace_all_activities(activity_ids)
    return []


def update_category_plans(
    member: Member,
    attendee: Attendee,
    category: PlanCategory,
    params: Mapping[str, Any] | None,
    session: Mapping[str, Any] | None = None,
) -> PageResult:
    """Save the plan page of one category.

    Quantities are read from ``plan_<id>_qty`` for the enabled plans of the
    category suitable for the attendee's age. The attendee's plans in the
    category are replaced by the ones with a positive quantity; disabled
    plans already held are kept.

    Args:
        member: Member submitting the form
        attendee: Attendee being edited
        category: Category of the page
        params: Submitted data, quantities under ``attendee``
        session: Session storage holding the events of interest

    Returns:
        The result, with the next plan page or the terminus on success

    Raises:
        PermissionError: If the member cannot edit the attendee
        PlanCategory.DoesNotExist: If the category is not on the form for this attendee
    """
    assert_can_edit(member, attendee)

    age = attendee.age_in_years()
    category = reg_form_categories(attendee.year, age).get(pk=category.pk)
    data = (params or {}).get("attendee") or {}
    errors = []

    with transaction.atomic():
        attendee.clear_plan_category(category.id)

        nascent = []
        for plan in get_category_plans(category, age):
            qty = parse_quantity(data.get(f"plan_{plan.id}_qty"))
            if qty <= 0:
                continue
            attendee_plan = AttendeePlan(attendee=attendee, plan=plan, quantity=qty)
            try:
                attendee_plan.full_clean(validate_unique=False, validate_constraints=False)
            except ValidationError as err:
                for field_name, messages in err.message_dict.items():
                    errors.extend(f"{field_name} {message}" for message in messages)
                continue
            attendee_plan.save()
            nascent.append(attendee_plan)

        if category.mandatory and not nascent:
            errors.append(str(_("This is a mandatory category, so please select at least one plan")))

        if errors:
            transaction.set_rollback(True)
            return PageResult(attendee, False, errors)

    events_of_interest = (session or {}).get(EVENTS_SESSION_KEY)
    next_step = RegistrationProcess(attendee).next_page(None, category, events_of_interest)
    return PageResult(attendee, True, next_step=next_step)
