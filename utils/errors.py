"""
Domain errors raised by the services and rendered by the API error handler
"""
from fastapi import status


class EcoPulseError(Exception):
    """Base class for every error the core raises"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = ""):
        self.message = message or self.__class__.__name__
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.__class__.__name__


# ─── Taxonomy ──────────────────────────────────────────────────────────────
class ValidationError(EcoPulseError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(EcoPulseError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(EcoPulseError):
    status_code = status.HTTP_409_CONFLICT


class StateError(EcoPulseError):
    status_code = status.HTTP_409_CONFLICT


# ─── Concrete errors ───────────────────────────────────────────────────────
class InvalidQuantity(ValidationError):
    pass


class ChallengeNotFound(NotFoundError):
    pass


class EnrollmentNotFound(NotFoundError):
    pass


class RecordNotFound(NotFoundError):
    pass


class ProfileNotFound(NotFoundError):
    pass


class AlreadyJoined(ConflictError):
    pass


class DuplicateBillingPeriod(ConflictError):
    pass


class ChallengeExpired(ConflictError):
    pass


class NoBaselineData(ConflictError):
    pass


class InvalidStateTransition(StateError):
    pass


class AlreadyFinalized(InvalidStateTransition):
    pass
