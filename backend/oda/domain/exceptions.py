"""Domain-specific exceptions — framework-independent."""


class ChatProviderError(Exception):
    """Raised when a chat provider returns an error."""

    def __init__(self, provider: str, status_code: int, message: str):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{provider}] {status_code}: {message}")


class QueryPlanningError(Exception):
    """Raised when no query plan can be produced for a prompt."""

    def __init__(self, prompt: str, reason: str):
        self.prompt = prompt
        self.reason = reason
        super().__init__(f"Could not plan query for {prompt!r}: {reason}")
