class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class InvalidSessionError(AppError):
    """Raised when a candidate session is malformed (group/sub-group XOR, pool membership, unknown values)."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=422, details=details)

class ConflictError(AppError):
    """Raised by the commit gate when a candidate collides with an existing session."""
    def __init__(self, kind: str, existing: dict):
        self.kind = kind
        self.existing = existing
        label = "Room" if kind == "room_conflict" else "Group"
        super().__init__(
            f"{label} conflict with {existing.get('subject')} ({existing.get('day')} {existing.get('time')}, {existing.get('room')})",
            status_code=409,
            details={"kind": kind, "existing": existing},
        )

class SessionNotFoundError(AppError):
    """Raised when a session id is required to exist but does not."""
    def __init__(self, session_id: str):
        super().__init__(f"Session with id {session_id} not found", status_code=404)

class ScheduleImportError(AppError):
    """Raised when an imported schedule file is malformed or violates an invariant."""
    def __init__(self, problems: list[str]):
        super().__init__("Imported schedule is invalid", status_code=400, details={"problems": problems})
