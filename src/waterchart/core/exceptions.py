class AppValidationError(ValueError):
    """Raised when caller parameters or chart options are invalid."""


class UpstreamServiceError(RuntimeError):
    """Raised when a collaborator hands the pipeline an unusable payload."""
