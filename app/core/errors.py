# app/core/errors.py


class AnalysisError(Exception):
    """Base error for a failed PR analysis request."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class InvalidInput(AnalysisError):
    status_code = 400

    def __init__(self, message: str = "Invalid GitHub PR URL"):
        super().__init__(message)


class MissingCredential(AnalysisError):
    def __init__(self, message: str = "Missing token configuration"):
        super().__init__(message)


class UpstreamFailure(AnalysisError):
    """The GitHub API call failed (PR not found, rate limited, network down)."""
