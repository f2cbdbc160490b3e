"""HTTP error translation

Use case errors are raised as ClientError and rendered by the handler
registered in create_app as {"error": {"code": ..., "message": ...}}.
"""

from fastapi import status
from libs.result import Error

STATUS_BY_CODE = {
    "UNAUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "VALIDATION_FAILED": status.HTTP_400_BAD_REQUEST,
    "INVALID_TRANSITION": status.HTTP_409_CONFLICT,
    "DUPLICATE_INVOICE_NUMBER": status.HTTP_409_CONFLICT,
    "INVOICE_NUMBER_EXHAUSTED": status.HTTP_409_CONFLICT,
    "EMAIL_DELIVERY_FAILED": status.HTTP_502_BAD_GATEWAY,
    "DOCUMENT_GENERATION_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(Exception):
    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    @classmethod
    def from_error(cls, error: Error) -> "ClientError":
        """ClientError with the status code conventionally used for error.code"""
        return cls(error, status_code=STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST))

    def to_dict(self) -> dict:
        return {"error": {"code": self.error.code, "message": self.error.message}}
