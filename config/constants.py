"""Constants used across the application."""

from enum import Enum


# Marketplace sides a profile can belong to
class Role(str, Enum):
    CLIENT = "client"
    PROVIDER = "provider"


# What a profile page means to do
class Intent(str, Enum):
    NEW = "new"
    EDIT = "edit"
    VIEW = "view"


# One table per role; the only place a role selects a collection
PROFILE_TABLES = {
    Role.CLIENT: "client_profiles",
    Role.PROVIDER: "provider_profiles",
}

# Columns a profile form may write, per role
PROFILE_FIELDS = {
    Role.CLIENT: ("name", "location", "bio", "preferences"),
    Role.PROVIDER: ("name", "age", "location", "hourly_rate", "bio", "images"),
}

# Auth routes
LOGIN_ROUTE = "/auth/login"

# Session cookie keys
SESSION_TOKEN_KEY = "access_token"
SESSION_USER_KEY = "user"
SESSION_REFRESH_KEY = "refresh_token"

# Validation limits
MIN_PROVIDER_AGE = 18
MAX_NAME_LENGTH = 120
MAX_LOCATION_LENGTH = 120
MAX_BIO_LENGTH = 2000
# provider_profiles.hourly_rate is NUMERIC(10, 2)
MAX_HOURLY_RATE = 10**8
