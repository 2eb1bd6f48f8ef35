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

from typing import ClassVar

from django.contrib import admin
from import_export import resources

from gocongress.admin.base import DefModelAdmin, EventFilter, MemberFilter, PlanCategoryFilter
from gocongress.models.attendee import Attendee, AttendeeTournament
from gocongress.models.miscellanea import Activity, Discount, Tournament
from gocongress.models.plan import AttendeePlan, AttendeePlanDate, Event, Plan, PlanCategory


class AttendeeResource(resources.ModelResource):
    """Attendee export for the registrar spreadsheets."""

    class Meta:
        model = Attendee
        exclude = ("deleted", "deleted_by_cascade")


class PlanResource(resources.ModelResource):
    class Meta:
        model = Plan
        exclude = ("deleted", "deleted_by_cascade")


class AttendeePlanInline(admin.TabularInline):
    model = AttendeePlan
    fields = ("plan", "quantity")
    autocomplete_fields: ClassVar[list] = ["plan"]
    extra = 0


class AttendeeTournamentInline(admin.TabularInline):
    model = AttendeeTournament
    fields = ("tournament", "notes")
    extra = 0


class AttendeePlanDateInline(admin.TabularInline):
    model = AttendeePlanDate
    extra = 0


@admin.register(Attendee)
class AttendeeAdmin(DefModelAdmin):
    list_display = ("given_name", "family_name", "year", "rank", "email", "is_primary", "minor_agreement_received")
    list_filter = (MemberFilter, "year", "anonymous", "minor_agreement_received")
    search_fields: ClassVar[list] = ["given_name", "family_name", "email"]
    autocomplete_fields: ClassVar[list] = ["member", "guardian_attendee", "activities", "discounts"]
    inlines: ClassVar[list] = [AttendeePlanInline, AttendeeTournamentInline]
    resource_classes: ClassVar[list] = [AttendeeResource]


@admin.register(AttendeePlan)
class AttendeePlanAdmin(admin.ModelAdmin):
    list_display = ("attendee", "plan", "quantity", "created")
    search_fields: ClassVar[list] = ["attendee__given_name", "attendee__family_name", "plan__name"]
    autocomplete_fields: ClassVar[list] = ["attendee", "plan"]
    inlines: ClassVar[list] = [AttendeePlanDateInline]


@admin.register(Event)
class EventAdmin(DefModelAdmin):
    list_display = ("name", "year", "evtdeparttime")
    list_filter: ClassVar[tuple] = ("year",)
    search_fields: ClassVar[list] = ["name"]


@admin.register(PlanCategory)
class PlanCategoryAdmin(DefModelAdmin):
    list_display = ("name", "year", "event", "mandatory", "show_on_reg_form", "ordinal")
    list_filter = (EventFilter, "year", "mandatory")
    search_fields: ClassVar[list] = ["name"]
    autocomplete_fields: ClassVar[list] = ["event"]


@admin.register(Plan)
class PlanAdmin(DefModelAdmin):
    list_display = ("name", "year", "plan_category", "price", "disabled", "inventory", "max_quantity", "daily")
    list_filter = (PlanCategoryFilter, "year", "disabled", "daily")
    search_fields: ClassVar[list] = ["name"]
    autocomplete_fields: ClassVar[list] = ["plan_category"]
    resource_classes: ClassVar[list] = [PlanResource]


@admin.register(Activity)
class ActivityAdmin(DefModelAdmin):
    list_display = ("name", "year", "leave_time", "return_time", "price", "disabled")
    list_filter: ClassVar[tuple] = ("year", "disabled")
    search_fields: ClassVar[list] = ["name"]


@admin.register(Discount)
class DiscountAdmin(DefModelAdmin):
    list_display = ("name", "year", "amount", "is_automatic", "age_min", "age_max", "min_reg_date")
    list_filter: ClassVar[tuple] = ("year", "is_automatic")
    search_fields: ClassVar[list] = ["name"]


@admin.register(Tournament)
class TournamentAdmin(DefModelAdmin):
    list_display = ("name", "year", "openness", "show_attendee_notes_field", "show_in_nav_menu")
    list_filter: ClassVar[tuple] = ("year", "openness")
    search_fields: ClassVar[list] = ["name"]
