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

import logging

from django.utils.translation import gettext_lazy as _

from gocongress.models.attendee import Attendee
from gocongress.models.rank import rank_name
from gocongress.utils.tasks import get_reply_to, my_send_mail

logger = logging.getLogger(__name__)


def registration_plans(attendee: Attendee) -> str:
    """HTML list of the plans selected by an attendee."""
    lines = []
    for attendee_plan in attendee.attendee_plans.select_related("plan").prefetch_related("dates"):
        line = f"<li>{attendee_plan.plan.name}"
        if attendee_plan.quantity > 1:
            line += f" x {attendee_plan.quantity}"
        dates = [el.date.isoformat() for el in attendee_plan.dates.all()]
        if dates:
            line += f" ({', '.join(dates)})"
        lines.append(line + "</li>")

    if not lines:
        return "<br /><br />" + str(_("No plan selected yet"))

    return "<br /><br />" + str(_("Selected plans")) + ":<ul>" + "".join(lines) + "</ul>"


def send_attendee_created(attendee: Attendee) -> None:
    """Confirm a new registration to the attendee, and notify the registrar.

    Args:
        attendee: Newly created attendee
    """
    context = {"name": attendee.full_name(), "year": attendee.year}

    subject = _("Registration for %(name)s") % context
    body = _("Hello! <b>%(name)s</b> is now registered for the %(year)s Go Congress") % context + "."
    body += "<br /><br />" + str(_("You can choose plans and activities from your account page."))
    my_send_mail(subject, body, attendee, attendee.year)

    subject = _("New attendee: %(name)s") % context
    body = _("A new attendee registered: <b>%(name)s</b>") % context
    body += f"<br />{attendee.email} - {rank_name(attendee.rank)}"
    my_send_mail(subject, body, get_reply_to(attendee.year), attendee.year)
    logger.debug("Notified creation of attendee %s", attendee.pk)


def send_registration_summary(attendee: Attendee) -> None:
    """Send the attendee a summary of the registration just saved."""
    context = {"name": attendee.full_name()}

    subject = _("Registration updated for %(name)s") % context
    body = _("Hi! The registration of <b>%(name)s</b> has been updated") % context + "."
    body += registration_plans(attendee)

    discounts = list(attendee.discounts.values_list("name", flat=True))
    if discounts:
        body += str(_("Discounts")) + ": " + ", ".join(discounts)

    my_send_mail(subject, body, attendee, attendee.year)


def send_attendee_deleted(attendee: Attendee) -> None:
    """Notify the attendee and the registrar that a registration was cancelled."""
    context = {"name": attendee.full_name(), "year": attendee.year}

    subject = _("Registration cancelled for %(name)s") % context
    body = _("The registration of <b>%(name)s</b> for the %(year)s Go Congress has been cancelled") % context + "."
    my_send_mail(subject, body, attendee, attendee.year)

    registrar = get_reply_to(attendee.year)
    if registrar != attendee.email:
        my_send_mail(subject, body, registrar, attendee.year)
