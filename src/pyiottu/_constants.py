"""Internal constants shared across the library."""

BASE_URL = "http://10.0.2.2:8080/api/v1"

#: Message carried by failures where no response was received at all.
NETWORK_ERROR_SIGNAL = "Network Error"

LOGIN_PATH = "/auth/login"
MOTORCYCLE_STATUSES_PATH = "/motorcycle-statuses"

# Query parameter used to scope list requests to one user.
SCOPE_PARAM = "userId"

# ------------------------------------------------------------------
# Persisted client state
# ------------------------------------------------------------------

STORAGE_NAMESPACE = "@iottu"
SESSION_STORAGE_KEY = f"{STORAGE_NAMESPACE}:user"
THEME_STORAGE_KEY = f"{STORAGE_NAMESPACE}:theme"
