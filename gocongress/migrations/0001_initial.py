import django.db.models.deletion
import django.utils.timezone
import phonenumber_field.modelfields
from django.conf import settings
from django.db import migrations, models

import gocongress.models.rank


def base_fields():
    return [
        ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("deleted", models.DateTimeField(db_index=True, editable=False, null=True)),
        ("deleted_by_cascade", models.BooleanField(default=False, editable=False)),
        ("created", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
        ("updated", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Year",
            fields=[
                *base_fields(),
                ("year", models.IntegerField(unique=True)),
                ("city", models.CharField(max_length=100)),
                ("state", models.CharField(blank=True, max_length=100)),
                ("date_range", models.CharField(help_text="Human readable dates, e.g. 'Aug 1 - 9'", max_length=100)),
                ("start_date", models.DateField()),
                ("day_off_date", models.DateField(blank=True, null=True)),
                ("ordinal_number", models.IntegerField(help_text="Which congress this is, e.g. 27 for the 27th")),
                (
                    "registration_phase",
                    models.CharField(
                        choices=[("open", "Open"), ("closed", "Closed"), ("complete", "Complete"), ("canceled", "Canceled")],
                        default="closed",
                        max_length=10,
                    ),
                ),
                ("reply_to_email", models.EmailField(blank=True, max_length=254)),
                ("timezone", models.CharField(default="Eastern Time (US & Canada)", max_length=100)),
                ("twitter_url", models.URLField(blank=True)),
            ],
            options={"ordering": ["-year"]},
        ),
        migrations.CreateModel(
            name="Member",
            fields=[
                *base_fields(),
                ("email", models.EmailField(max_length=254)),
                ("year", models.IntegerField()),
                (
                    "role",
                    models.CharField(choices=[("A", "Admin"), ("S", "Staff"), ("U", "User")], default="U", max_length=1),
                ),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE, related_name="member", to=settings.AUTH_USER_MODEL
                    ),
                ),
            ],
            options={"ordering": ["email"]},
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                *base_fields(),
                ("year", models.IntegerField()),
                ("name", models.CharField(max_length=100)),
                ("evtdeparttime", models.DateTimeField(blank=True, null=True)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="PlanCategory",
            fields=[
                *base_fields(),
                ("year", models.IntegerField()),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True)),
                (
                    "mandatory",
                    models.BooleanField(default=False, help_text="Attendees must select at least one plan in this category"),
                ),
                ("show_on_reg_form", models.BooleanField(default=True)),
                ("ordinal", models.IntegerField(default=0)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="plan_categories", to="gocongress.event"
                    ),
                ),
            ],
            options={"ordering": ["ordinal", "name"]},
        ),
        migrations.CreateModel(
            name="Plan",
            fields=[
                *base_fields(),
                ("year", models.IntegerField()),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True)),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("age_min", models.IntegerField(default=0)),
                ("age_max", models.IntegerField(blank=True, null=True)),
                (
                    "disabled",
                    models.BooleanField(
                        default=False,
                        help_text="Disabled plans can no longer be selected, but attendees who already have them keep them",
                    ),
                ),
                (
                    "inventory",
                    models.IntegerField(blank=True, help_text="Total number available, leave empty for unlimited", null=True),
                ),
                ("max_quantity", models.IntegerField(default=1, help_text="Maximum quantity a single attendee can select")),
                ("daily", models.BooleanField(default=False, help_text="Attendees choose the dates they need")),
                ("cat_order", models.IntegerField(default=0)),
                (
                    "plan_category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="plans", to="gocongress.plancategory"
                    ),
                ),
            ],
            options={"ordering": ["cat_order", "name"]},
        ),
        migrations.CreateModel(
            name="Discount",
            fields=[
                *base_fields(),
                ("year", models.IntegerField()),
                ("name", models.CharField(max_length=100)),
                ("amount", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                (
                    "is_automatic",
                    models.BooleanField(
                        default=False,
                        help_text="Automatic discounts are applied by the system and cannot be claimed by attendees",
                    ),
                ),
                ("age_min", models.IntegerField(blank=True, null=True)),
                ("age_max", models.IntegerField(blank=True, null=True)),
                (
                    "min_reg_date",
                    models.DateField(
                        blank=True, help_text="Only attendees registered before this date receive the discount", null=True
                    ),
                ),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Activity",
            fields=[
                *base_fields(),
                ("year", models.IntegerField()),
                ("name", models.CharField(max_length=100)),
                ("leave_time", models.DateTimeField()),
                ("return_time", models.DateTimeField(blank=True, null=True)),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                (
                    "disabled",
                    models.BooleanField(
                        default=False,
                        help_text="Disabled activities can no longer be selected, but attendees who already have them keep them",
                    ),
                ),
                ("notes", models.TextField(blank=True)),
            ],
            options={"ordering": ["leave_time", "name"]},
        ),
        migrations.CreateModel(
            name="Tournament",
            fields=[
                *base_fields(),
                ("year", models.IntegerField()),
                ("name", models.CharField(max_length=100)),
                (
                    "openness",
                    models.CharField(choices=[("O", "Open"), ("I", "Invitational")], default="O", max_length=1),
                ),
                ("show_attendee_notes_field", models.BooleanField(default=False)),
                ("attendee_notes_field_label", models.CharField(blank=True, max_length=100)),
                ("show_in_nav_menu", models.BooleanField(default=False)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Attendee",
            fields=[
                *base_fields(),
                ("year", models.IntegerField()),
                ("given_name", models.CharField(max_length=100, verbose_name="Given name")),
                ("family_name", models.CharField(max_length=100, verbose_name="Family name")),
                ("email", models.EmailField(max_length=254)),
                (
                    "phone",
                    phonenumber_field.modelfields.PhoneNumberField(
                        blank=True, help_text="Remember to put the prefix at the beginning!", max_length=128, region=None
                    ),
                ),
                ("birth_date", models.DateField()),
                ("gender", models.CharField(choices=[("m", "Male"), ("f", "Female")], max_length=1)),
                ("country", models.CharField(help_text="Two letter country code", max_length=2)),
                ("address_1", models.CharField(blank=True, max_length=200)),
                ("address_2", models.CharField(blank=True, max_length=200)),
                ("city", models.CharField(blank=True, max_length=100)),
                ("state", models.CharField(blank=True, max_length=100)),
                ("zip", models.CharField(blank=True, max_length=20)),
                ("rank", models.IntegerField(choices=gocongress.models.rank.RANK_CHOICES)),
                ("aga_id", models.IntegerField(blank=True, null=True, verbose_name="AGA ID")),
                ("anonymous", models.BooleanField(default=False, help_text="Hide my name from the public attendee list")),
                ("is_primary", models.BooleanField(default=False, editable=False)),
                ("guardian_full_name", models.CharField(blank=True, max_length=200)),
                ("roomate_request", models.TextField(blank=True)),
                ("special_request", models.TextField(blank=True)),
                (
                    "tshirt_size",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("NO", "None"),
                            ("YS", "Youth Small"),
                            ("YM", "Youth Medium"),
                            ("YL", "Youth Large"),
                            ("AS", "Adult Small"),
                            ("AM", "Adult Medium"),
                            ("AL", "Adult Large"),
                            ("1X", "Adult XL"),
                            ("2X", "Adult XXL"),
                        ],
                        max_length=2,
                    ),
                ),
                ("will_play_in_us_open", models.BooleanField(default=False)),
                ("understand_minor", models.BooleanField(default=False)),
                ("airport_arrival", models.DateTimeField(blank=True, null=True)),
                ("airport_departure", models.DateTimeField(blank=True, null=True)),
                ("comment", models.TextField(blank=True)),
                ("minor_agreement_received", models.BooleanField(default=False)),
                (
                    "guardian_attendee",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="minors",
                        to="gocongress.attendee",
                    ),
                ),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="attendees", to="gocongress.member"
                    ),
                ),
                ("activities", models.ManyToManyField(blank=True, related_name="attendees", to="gocongress.activity")),
                ("discounts", models.ManyToManyField(blank=True, related_name="attendees", to="gocongress.discount")),
            ],
            options={"ordering": ["family_name", "given_name"]},
        ),
        migrations.CreateModel(
            name="AttendeePlan",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.IntegerField(default=1)),
                ("created", models.DateTimeField(auto_now_add=True)),
                (
                    "attendee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="attendee_plans", to="gocongress.attendee"
                    ),
                ),
                (
                    "plan",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="attendee_plans", to="gocongress.plan"
                    ),
                ),
            ],
            options={
                "constraints": [models.UniqueConstraint(fields=("attendee", "plan"), name="unique_attendee_plan")],
            },
        ),
        migrations.AddField(
            model_name="attendee",
            name="plans",
            field=models.ManyToManyField(
                blank=True, related_name="attendees", through="gocongress.AttendeePlan", to="gocongress.plan"
            ),
        ),
        migrations.CreateModel(
            name="AttendeePlanDate",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                (
                    "attendee_plan",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="dates", to="gocongress.attendeeplan"
                    ),
                ),
            ],
            options={
                "ordering": ["date"],
                "constraints": [
                    models.UniqueConstraint(fields=("attendee_plan", "date"), name="unique_attendee_plan_date")
                ],
            },
        ),
        migrations.CreateModel(
            name="AttendeeTournament",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("notes", models.CharField(blank=True, max_length=50)),
                (
                    "attendee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attendee_tournaments",
                        to="gocongress.attendee",
                    ),
                ),
                (
                    "tournament",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attendee_tournaments",
                        to="gocongress.tournament",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("attendee", "tournament"), name="unique_attendee_tournament")
                ],
            },
        ),
        migrations.AddField(
            model_name="attendee",
            name="tournaments",
            field=models.ManyToManyField(
                blank=True, related_name="attendees", through="gocongress.AttendeeTournament", to="gocongress.tournament"
            ),
        ),
    ]
