"""
Error taxonomy shared by repositories, adapters and the API layer.

Every failure is scoped to the request that produced it. The API layer maps
each class to one HTTP status (see ``cms.api.main``).
"""
from typing import Any, Optional


class CmsError(Exception):
    """Base class for errors raised by the CMS core."""

    status_code = 400

    def __init__(self, message: str, detail: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        return {
            "detail": self.message,
            "error": type(self).__name__,
            "provider_detail": self.detail,
        }


class ValidationError(CmsError):
    """Malformed, missing or out-of-enum input."""

    status_code = 422


class NotFoundError(CmsError):
    """The referenced entity does not exist."""

    status_code = 404


class ConflictError(CmsError):
    """A uniqueness constraint would be violated."""

    status_code = 409


class UploadError(CmsError):
    """The media host rejected or failed an upload/deletion."""

    status_code = 502


class DeliveryError(CmsError):
    """The email provider rejected or failed a send."""

    status_code = 502
