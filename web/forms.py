"""Profile form rendering."""

from dataclasses import dataclass
from typing import Any
from quart import render_template
from config.constants import Role
from profiles.models import ProfileRecord


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    input_type: str = "text"
    required: bool = True


FORM_FIELDS = {
    Role.CLIENT: [
        FormField("name", "Name"),
        FormField("location", "Location"),
        FormField("bio", "About you", "textarea", required=False),
        FormField("preferences", "What you are looking for", "textarea", required=False),
    ],
    Role.PROVIDER: [
        FormField("name", "Name"),
        FormField("age", "Age", "number"),
        FormField("location", "Location"),
        FormField("hourly_rate", "Hourly rate", "number"),
        FormField("bio", "Bio", "textarea", required=False),
    ],
}


class FormRenderer:
    """Renders the editable profile form for a role."""

    async def render(
        self,
        role: Role,
        existing_profile: ProfileRecord | None = None,
        values: dict[str, Any] | None = None,
        errors: dict[str, str] | None = None,
    ) -> str:
        if values is None:
            values = existing_profile or {}
        return await render_template(
            "profile_form.html",
            role=role.value,
            intent="edit" if existing_profile else "new",
            fields=FORM_FIELDS[role],
            values=values,
            errors=errors or {},
        )

    async def render_profile(self, role: Role, profile: ProfileRecord) -> str:
        return await render_template(
            "profile_view.html",
            role=role.value,
            fields=FORM_FIELDS[role],
            profile=profile,
        )
