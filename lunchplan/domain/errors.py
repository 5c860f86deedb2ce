"""Error taxonomy shared by repositories, the caller boundary and the API layer."""


class PlannerError(Exception):
    kind = "Error"
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind

    def to_dict(self):
        return {"status": "error", "kind": self.kind, "message": self.message}


class NotFound(PlannerError):
    """Referenced entity id does not exist."""
    kind = "NotFound"
    status_code = 404


class Forbidden(PlannerError):
    """Entity exists but is owned by a different user."""
    kind = "Forbidden"
    status_code = 403


class InvalidArgument(PlannerError):
    kind = "InvalidArgument"
    status_code = 400


class Conflict(PlannerError):
    kind = "Conflict"
    status_code = 409


class Unauthorized(PlannerError):
    kind = "Unauthorized"
    status_code = 401


class StorageError(PlannerError):
    kind = "StorageError"
    status_code = 500
