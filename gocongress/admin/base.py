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
from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from admin_auto_filters.filters import AutocompleteFilter
from django.contrib import admin
from import_export import resources
from import_export.admin import ImportExportModelAdmin

from gocongress.models.member import Member
from gocongress.models.year import Year

if TYPE_CHECKING:
    from django.db.models import QuerySet
    from django.http import HttpRequest


def is_registrar(request: HttpRequest) -> bool:
    """Superusers and members with the admin role manage the registrations."""
    if request.user.is_superuser:
        return True
    return hasattr(request.user, "member") and request.user.member.is_admin()


class DefModelAdmin(ImportExportModelAdmin):
    """Base admin class with import/export, limited to registrars.

    Staff users without the admin member role see nothing.
    """

    ordering: ClassVar[list] = ["-updated"]

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        qs = super().get_queryset(request)
        if not is_registrar(request):
            return qs.none()
        return qs

    def has_module_permission(self, request: HttpRequest) -> bool:
        if not is_registrar(request):
            return False
        return super().has_module_permission(request)


class MemberFilter(AutocompleteFilter):
    """Admin filter for Member autocomplete."""

    title = "Member"
    field_name = "member"


class EventFilter(AutocompleteFilter):
    """Admin filter for Event autocomplete."""

    title = "Event"
    field_name = "event"


class PlanCategoryFilter(AutocompleteFilter):
    """Admin filter for PlanCategory autocomplete."""

    title = "Plan category"
    field_name = "plan_category"


class YearResource(resources.ModelResource):
    class Meta:
        model = Year


@admin.register(Year)
class YearAdmin(DefModelAdmin):
    list_display = ("year", "ordinal_number", "city", "state", "date_range", "registration_phase")
    list_filter: ClassVar[tuple] = ("registration_phase",)
    search_fields: ClassVar[list] = ["city", "year"]
    ordering: ClassVar[list] = ["-year"]
    resource_classes: ClassVar[list] = [YearResource]


@admin.register(Member)
class MemberAdmin(DefModelAdmin):
    list_display = ("email", "year", "role")
    list_filter: ClassVar[tuple] = ("year", "role")
    search_fields: ClassVar[list] = ["email"]
    autocomplete_fields: ClassVar[list] = ["user"]
