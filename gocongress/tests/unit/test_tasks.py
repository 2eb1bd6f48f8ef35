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

"""Tests for mail sending, background tasks and the attendee signals"""

from unittest.mock import patch

import pytest
from background_task.models import Task

from gocongress.tests.unit.base import BaseTestCase
from gocongress.utils.tasks import get_reply_to, my_send_mail


class TestMySendMail(BaseTestCase):
    """Test queuing and sending mails"""

    def test_subject_prefix_and_reply_to(self, mailoutbox):
        self.get_year()

        my_send_mail("Hello  there", "<b>Welcome</b>", "someone@example.com", 2026)

        assert len(mailoutbox) == 1
        mail = mailoutbox[0]
        assert mail.subject == "[Go Congress 2026] Hello there"
        assert mail.body == "Welcome"
        assert mail.reply_to == ["registrar@example.com"]

    def test_member_recipient(self, mailoutbox):
        member = self.get_member()

        my_send_mail("Hello", "body", member)

        assert mailoutbox[0].to == [member.email]
        assert mailoutbox[0].subject == "Hello"

    def test_blank_recipient_skipped(self, mailoutbox):
        my_send_mail("Hello", "body", "")

        assert len(mailoutbox) == 0

    def test_reply_to_fallback(self, settings):
        settings.REGISTRAR_EMAIL = "fallback@example.com"

        assert get_reply_to(2030) == "fallback@example.com"
        assert get_reply_to(None) == "fallback@example.com"

    def test_queued_when_not_inline(self, settings, mailoutbox):
        settings.AUTO_BACKGROUND_TASKS = False

        my_send_mail("Hello", "body", "someone@example.com", schedule=60)

        assert len(mailoutbox) == 0
        assert Task.objects.filter(queue="mail").count() == 1

    @patch("gocongress.utils.tasks.EmailMultiAlternatives.send", side_effect=ConnectionError("smtp down"))
    def test_send_failure_logged_and_raised(self, mock_send, caplog):
        with pytest.raises(ConnectionError):
            my_send_mail("Hello", "body", "someone@example.com")

        assert "smtp down" in caplog.text


class TestAttendeeSignals(BaseTestCase):
    """Test notifications sent on attendee creation and deletion"""

    def test_creation_notifies_attendee_and_registrar(self, mailoutbox):
        attendee = self.create_attendee()

        recipients = {mail.to[0] for mail in mailoutbox}
        assert recipients == {attendee.email, "registrar@example.com"}
        assert all(mail.subject.startswith("[Go Congress 2026]") for mail in mailoutbox)

    def test_update_does_not_notify(self, mailoutbox):
        attendee = self.create_attendee()
        mailoutbox.clear()

        attendee.given_name = "Go"
        attendee.save()

        assert len(mailoutbox) == 0

    def test_deletion_notifies(self, mailoutbox):
        attendee = self.create_attendee()
        mailoutbox.clear()

        attendee.delete()

        assert len(mailoutbox) == 2
        assert all("Registration cancelled" in mail.subject for mail in mailoutbox)
