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

from django.db.models.signals import post_save, pre_delete
from django.dispatch import receiver

from gocongress.mail.registration import send_attendee_created, send_attendee_deleted
from gocongress.models.attendee import Attendee

log = logging.getLogger(__name__)


# Attendee signals
@receiver(post_save, sender=Attendee)
def post_save_attendee(sender, instance, created, **kwargs):
    if created:
        send_attendee_created(instance)


@receiver(pre_delete, sender=Attendee)
def pre_delete_attendee(sender, instance, **kwargs):
    log.info("Deleting attendee %s of year %s", instance.pk, instance.year)
    send_attendee_deleted(instance)
