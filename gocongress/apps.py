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

from django.apps import AppConfig


class GoCongressConfig(AppConfig):
    name = "gocongress"

    default_auto_field = "django.db.models.AutoField"

    # Import signals
    def ready(self):
        _ = __import__("gocongress.models.signals")
