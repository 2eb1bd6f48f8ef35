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

from django.contrib import admin
from django.test import RequestFactory

from gocongress.admin.base import is_registrar
from gocongress.admin.registrations import AttendeeResource
from gocongress.models.attendee import Attendee
from gocongress.models.plan import Plan
from gocongress.tests.unit.base import BaseTestCase


class TestAdmin(BaseTestCase):
    """Test the registrar admin"""

    def test_models_registered(self):
        assert admin.site.is_registered(Attendee)
        assert admin.site.is_registered(Plan)

    def test_registrar_access(self):
        request = RequestFactory().get("/admin/")
        request.user = self.get_member().user
        assert not is_registrar(request)

        request.user = self.create_admin().user
        assert is_registrar(request)

    def test_queryset_limited_to_registrars(self):
        self.create_attendee()
        model_admin = admin.site._registry[Attendee]
        request = RequestFactory().get("/admin/")

        request.user = self.get_member().user
        assert model_admin.get_queryset(request).count() == 0

        request.user = self.create_admin().user
        assert model_admin.get_queryset(request).count() == 1

    def test_attendee_export(self):
        self.create_attendee()

        dataset = AttendeeResource().export()

        assert "given_name" in dataset.headers
        assert "deleted" not in dataset.headers
        assert dataset.dict[0]["family_name"] == "Shusaku"
