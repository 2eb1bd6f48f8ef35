# LarpManager - https://larpmanager.com
# Copyright (C) 2025 Scanagatta Mauro
#
# This file is part of LarpManager and is dual-licensed:
#
# 1. Under the terms of the GNU Affero General Public License (AGPL) version 3,
#    as published by the Free Software Foundation. You may use, modify, and
#    distribute this file under those terms.
#
# 2. Under a commercial license, allowing use in closed-source or proprietary
#    environments without the obligations of the AGPL.
#
# If you have obtained this file under the AGPL, and you make it available over
# a network, you must also make the complete source code available under the same license.
#
# For more information or to purchase a commercial license, contact:
# commercial@larpmanager.com
#
# SPDX-License-Identifier: AGPL-3.0-or-later OR Proprietary
import logging
from functools import wraps
from typing import Any, Callable, Optional, Union

from background_task import background
from django.conf import settings as conf_settings
from django.core.mail import EmailMultiAlternatives
from django.utils.html import strip_tags

from gocongress.models.attendee import Attendee
from gocongress.models.member import Member
from gocongress.models.year import Year

logger = logging.getLogger(__name__)

INTERNAL_KWARGS = {"schedule", "repeat", "repeat_until", "remove_existing_tasks"}


def background_auto(schedule=0, **background_kwargs):
    """Decorator to conditionally run functions as background tasks.

    Creates a decorator that can run functions either synchronously
    (if AUTO_BACKGROUND_TASKS is True) or as background tasks.

    Args:
        schedule (int): Seconds to delay before execution
        **background_kwargs: Additional arguments for background task

    Returns:
        function: Decorator function
    """

    def decorator(original_function: Callable[..., Any]) -> Callable[..., Any]:
        background_task = background(schedule=schedule, **background_kwargs)(original_function)

        @wraps(original_function)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            """Execute function directly or schedule as background task based on settings."""
            if getattr(conf_settings, "AUTO_BACKGROUND_TASKS", False):
                # Filter out internal kwargs that shouldn't be passed to the function
                filtered_kwargs = {key: value for key, value in kwargs.items() if key not in INTERNAL_KWARGS}
                return original_function(*args, **filtered_kwargs)
            else:
                return background_task(*args, **kwargs)

        wrapper.task = background_task
        wrapper.task_function = original_function
        return wrapper

    return decorator


# MAIL


def get_reply_to(year: Optional[int]) -> str:
    """Return the registrar address for a congress year, or the default one."""
    if year:
        reply_to = Year.objects.filter(year=year).values_list("reply_to_email", flat=True).first()
        if reply_to:
            return reply_to
    return conf_settings.REGISTRAR_EMAIL


def mail_error(subj, body, e=None):
    """Log an email sending failure.

    Args:
        subj (str): Email subject that failed
        body (str): Email body that failed
        e (Exception, optional): Exception that caused the failure
    """
    logger.error(f"Mail error: {e}")
    logger.error(f"Subject: {subj}")
    logger.error(f"Body: {body}")


@background_auto(queue="mail")
def send_mail_bkg(subject: str, body: str, recipient: str, reply_to: Optional[str] = None) -> None:
    """Send a single email through the configured backend.

    Args:
        subject: Email subject line
        body: Email body in HTML; a plain text alternative is derived from it
        recipient: Recipient address
        reply_to: Reply-To address

    Raises:
        Exception: Re-raises sending errors after logging them
    """
    email = EmailMultiAlternatives(
        subject,
        strip_tags(body),
        conf_settings.DEFAULT_FROM_EMAIL,
        [recipient],
        reply_to=[reply_to] if reply_to else None,
    )
    email.attach_alternative(body, "text/html")
    try:
        email.send()
    except Exception as e:
        mail_error(subject, body, e)
        raise


def my_send_mail(
    subject: str,
    body: str,
    recipient: Union[str, Member, Attendee],
    year: Optional[int] = None,
    schedule: int = 0,
) -> None:
    """Queue an email for delivery.

    Args:
        subject: Email subject line, prefixed with the congress name
        body: Email body content (HTML)
        recipient: Email address, or a Member or Attendee instance
        year: Congress year the mail is about, used for the prefix and reply-to
        schedule: Delay in seconds before sending
    """
    # Clean up duplicate spaces in subject line
    subject = str(subject).replace("  ", " ")

    if year:
        subject = f"[Go Congress {year}] {subject}"

    if isinstance(recipient, (Member, Attendee)):
        recipient = recipient.email

    if not recipient:
        logger.warning("Skipping mail without recipient: %s", subject)
        return

    send_mail_bkg(subject, str(body), recipient, get_reply_to(year), schedule=schedule)
