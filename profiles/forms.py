"""Validation models for submitted profile forms."""

from typing import Any
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from config.constants import (
    MAX_BIO_LENGTH,
    MAX_HOURLY_RATE,
    MAX_LOCATION_LENGTH,
    MAX_NAME_LENGTH,
    MIN_PROVIDER_AGE,
    Role,
)


class ProfileForm(BaseModel):
    """Shared parsing rules: trimmed strings, blank optional text is null."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @field_validator("bio", "preferences", mode="before", check_fields=False)
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ClientProfileForm(ProfileForm):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    location: str = Field(min_length=1, max_length=MAX_LOCATION_LENGTH)
    bio: str | None = Field(default=None, max_length=MAX_BIO_LENGTH)
    preferences: str | None = Field(default=None, max_length=MAX_BIO_LENGTH)


class ProviderProfileForm(ProfileForm):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    age: int = Field(ge=MIN_PROVIDER_AGE, le=120)
    location: str = Field(min_length=1, max_length=MAX_LOCATION_LENGTH)
    hourly_rate: float = Field(ge=0, lt=MAX_HOURLY_RATE, allow_inf_nan=False)
    bio: str | None = Field(default=None, max_length=MAX_BIO_LENGTH)


PROFILE_FORMS: dict[Role, type[ProfileForm]] = {
    Role.CLIENT: ClientProfileForm,
    Role.PROVIDER: ProviderProfileForm,
}


def parse_profile_form(role: Role, data: dict[str, Any]) -> dict[str, Any]:
    """Validate raw form data for a role. Raises pydantic.ValidationError."""
    return PROFILE_FORMS[role].model_validate(data).model_dump()


def form_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten a ValidationError into {field: message} for the template."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "form"
        errors.setdefault(field, err["msg"])
    return errors
