"""Record store error taxonomy.

Every failure a collaborator can report is one of three kinds. None of them
is fatal: the API turns them into an ``ErrorResponse`` envelope and the
caller may retry the action.
"""

from typing import Optional


class StoreError(Exception):
    """Base class for record store failures"""

    code = "STORE_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        entity: Optional[str] = None,
        record_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.record_id = record_id

    def log_extra(self) -> dict:
        return {
            "error_code": self.code,
            "entity": self.entity,
            "record_id": self.record_id,
        }


class RecordNotFound(StoreError):
    """Edit/delete target no longer exists"""

    code = "RESOURCE_NOT_FOUND"
    status_code = 404

    @classmethod
    def for_record(cls, entity: str, record_id: str) -> "RecordNotFound":
        return cls(
            f"The {entity} with ID {record_id} does not exist.",
            entity=entity,
            record_id=record_id,
        )


class ValidationFailed(StoreError):
    """Input rejected by the form boundary, a uniqueness rule, or the collaborator"""

    code = "VALIDATION_FAILED"
    status_code = 422

    def __init__(self, message: str, *, field: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.field = field

    def log_extra(self) -> dict:
        extra = super().log_extra()
        extra["field"] = self.field
        return extra


class CollaboratorUnavailable(StoreError):
    """Backing store could not be reached or failed while handling the call"""

    code = "COLLABORATOR_UNAVAILABLE"
    status_code = 503
