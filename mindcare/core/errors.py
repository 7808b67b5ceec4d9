"""
Error taxonomy. Each error carries the HTTP status the API boundary answers with;
the message is what the end user sees, so never put internal detail in it.
"""


class MindCareError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(MindCareError):
    """Malformed input, e.g. a questionnaire of the wrong length or an out-of-range item."""
    status_code = 400
    default_message = "Invalid input"


class UnauthorizedError(MindCareError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(MindCareError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(MindCareError):
    status_code = 404
    default_message = "Not found"


class DependencyUnavailableError(MindCareError):
    """Store or identity provider failure. Message stays generic; the cause is logged."""
    status_code = 500
    default_message = "Service temporarily unavailable"
