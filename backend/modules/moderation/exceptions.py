"""
Moderation module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class ModerationRequestNotFoundError(NotFoundError):
    """Raised when a moderation request is not found."""

    def __init__(self, request_id: str):
        super().__init__(
            f"Moderation request not found: {request_id}",
            code="MODERATION_REQUEST_NOT_FOUND",
            details={"request_id": request_id},
        )


class RequestAlreadyReviewedError(ConflictError):
    """Raised when deciding a request that is no longer pending."""

    def __init__(self, request_id: str, status: str):
        super().__init__(
            f"Moderation request already {status}: {request_id}",
            code="REQUEST_ALREADY_REVIEWED",
            details={"request_id": request_id, "status": status},
        )
