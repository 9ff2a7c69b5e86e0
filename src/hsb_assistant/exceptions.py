"""Assistant error taxonomy.

Every failure the chat can hit is one of these, and all of them are
recovered by the conversation controller before reaching the UI.
"""


class AssistantError(Exception):
    """Base class for assistant failures."""


class AssistantUnconfiguredError(AssistantError):
    """No API key is configured, so no request was attempted."""

    def __init__(self, message: str = "No API key configured for the assistant.") -> None:
        super().__init__(message)


class ResponseStreamError(AssistantError):
    """The remote model stream failed.

    The message is deliberately generic; upstream details only go to the
    diagnostics log.
    """

    def __init__(self, message: str = "Unable to fetch response.") -> None:
        super().__init__(message)
