"""
Application errors for clean API error handling.

Use UpstreamError when an agent pipeline invocation fails (model or tool call)
so the API can degrade the stream or return 500 with the failure detail.
"""


class UpstreamError(Exception):
    """Raised when an agent pipeline fails while producing its event stream."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
