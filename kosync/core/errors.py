"""Error taxonomy shared by services and routers.

Services raise these; ``kosync.main`` maps them to JSON responses of the form
``{"error": <kind>, "message": <text>}``.
"""


class SyncError(Exception):
    status_code = 500
    kind = "internal"
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInput(SyncError):
    status_code = 400
    kind = "invalid_input"
    message = "Missing required fields"


class Unauthenticated(SyncError):
    status_code = 401
    kind = "unauthenticated"
    message = "Invalid credentials"


class NotFound(SyncError):
    status_code = 404
    kind = "not_found"
    message = "Not found"


class AlreadyExists(SyncError):
    status_code = 409
    kind = "already_exists"
    message = "Username already exists"


class Internal(SyncError):
    pass


class ConfigurationError(Exception):
    """Raised at startup for settings the server cannot run with."""
