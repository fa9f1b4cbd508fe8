"""Tests for config/constants.py — roles, intents and table selection."""

from config.constants import (
    Intent,
    Role,
    PROFILE_FIELDS,
    PROFILE_TABLES,
    MIN_PROVIDER_AGE,
)


class TestRole:
    def test_values(self):
        assert {r.value for r in Role} == {"client", "provider"}

    def test_from_url_segment(self):
        assert Role("provider") is Role.PROVIDER


class TestIntent:
    def test_values(self):
        assert {i.value for i in Intent} == {"new", "edit", "view"}


class TestProfileTables:
    def test_every_role_has_a_table(self):
        assert set(PROFILE_TABLES) == set(Role)

    def test_table_names(self):
        assert PROFILE_TABLES[Role.CLIENT] == "client_profiles"
        assert PROFILE_TABLES[Role.PROVIDER] == "provider_profiles"

    def test_tables_are_distinct(self):
        assert len(set(PROFILE_TABLES.values())) == len(PROFILE_TABLES)


class TestProfileFields:
    def test_every_role_has_fields(self):
        assert set(PROFILE_FIELDS) == set(Role)

    def test_user_id_is_never_writable(self):
        for fields in PROFILE_FIELDS.values():
            assert "user_id" not in fields
            assert "id" not in fields

    def test_provider_specific_fields(self):
        assert "hourly_rate" in PROFILE_FIELDS[Role.PROVIDER]
        assert "hourly_rate" not in PROFILE_FIELDS[Role.CLIENT]


def test_min_provider_age():
    assert MIN_PROVIDER_AGE == 18
