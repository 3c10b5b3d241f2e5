# chefai/services/errors.py
# Exceptions shared by the AI / external-data services.
# Routes translate them: EmptyInput → 400, AINotReady → 503, UpstreamError → 500.

class AINotReady(Exception):
    """Client could not be built (API key missing or SDK not installed)."""
    pass

class MalformedResponse(Exception):
    """Model reply had no usable JSON or failed schema validation."""
    pass

class UpstreamError(Exception):
    """A third-party API call failed."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service

class EmptyInput(ValueError):
    """Required input (image data, ingredient list) was empty."""
    pass
