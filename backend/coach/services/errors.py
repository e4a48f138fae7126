class CoachError(Exception):
    """Base error; `status_code` is what the HTTP layer answers with."""

    status_code = 500
    message = "Internal error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(CoachError):
    status_code = 400
    message = "Missing transcription or topic"


class ServiceError(CoachError):
    status_code = 500
    message = "Failed to generate prompt"


class CapabilityUnavailable(CoachError):
    message = "Speech recognition not supported in this browser."


class PermissionDenied(CoachError):
    message = "Media device access denied"
