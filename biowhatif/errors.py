"""Error taxonomy shared by the services and the HTTP layer."""


class WhatIfError(Exception):
    """Base class for errors that are reported to the caller as `{"error": message}`."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(WhatIfError):
    """Bad caller input, or model output that does not fit the analysis record."""

    status_code = 400


class ConfigurationError(WhatIfError):
    """The service is missing configuration it needs, e.g. the Gemini API key."""

    status_code = 500


class UpstreamError(WhatIfError):
    """Gemini or RCSB failed. Carries the upstream HTTP status when there is one."""

    status_code = 500
