# app/utils/errors.py
from typing import Optional


class ServiceError(Exception):
    """Base class for every failure the data access layer reports"""


class ValidationError(ServiceError):
    """Input is missing required fields or has the wrong shape"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """The referenced task or user is not present"""

    def __init__(self, entity: str, entity_id: Optional[int] = None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} {entity_id} not found"
        super().__init__(message)


class StorageError(ServiceError):
    """Backend failure: connectivity, malformed query, constraint violation"""

    def __init__(self, operation: str, entity: str, message: str = ""):
        self.operation = operation
        self.entity = entity
        detail = f"failed to {operation} {entity}"
        if message:
            detail = f"{detail}: {message}"
        super().__init__(detail)
