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

from typing import Any

from django import forms

# Fields managed by django-safedelete, never user editable
SAFEDELETE_FIELDS = ("deleted", "deleted_by_cascade")


class MyForm(forms.ModelForm):
    """Base model form for the attendee pages.

    Removes the soft delete bookkeeping fields and exposes the submitted
    values that were accepted, so callers can stage them on the instance.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)

        for field_name in SAFEDELETE_FIELDS:
            if field_name in self.fields:
                del self.fields[field_name]

    def error_messages_by_field(self) -> dict[str, list[str]]:
        """Plain dict of error messages, keyed by field name."""
        return {field: [str(message) for message in messages] for field, messages in self.errors.items()}
