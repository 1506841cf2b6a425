"""Error taxonomy for the generation pipeline.

Architectural role:
    Gives the dispatcher a small, closed set of failure kinds. Each kind maps to a
    `status_hint` that the HTTP layer turns into a status code.

Kinds:
    - `client`: bad request fields. Raised before any network call.
    - `configuration`: a provider credential is missing. This is a deployment
      defect, reported with `status_hint="internal"`.
    - `upstream`: vendor answered with a non-success status. The vendor body is
      kept verbatim.
    - `internal`: anything else that went wrong while building or parsing a call.

Failure handling model:
    These exceptions never cross `GenerationDispatcher.generate`; they are
    converted into `GenerationResult` failures there.
"""

CLIENT = "client"
CONFIGURATION = "configuration"
UPSTREAM = "upstream"
INTERNAL = "internal"


class GenerationError(Exception):
    """Base class for request-level generation failures."""

    kind = INTERNAL
    status_hint = INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientError(GenerationError):
    """Request is missing or carries an invalid task, input, or provider."""

    kind = CLIENT
    status_hint = CLIENT


class ConfigurationError(GenerationError):
    """Selected provider lacks one or more required credential fields."""

    kind = CONFIGURATION
    status_hint = INTERNAL

    def __init__(self, provider: str, missing):
        self.provider = provider
        self.missing = tuple(missing)
        super().__init__(f"{provider} is not configured: missing {', '.join(self.missing)}")


class UpstreamError(GenerationError):
    """Vendor returned a non-success status; `message` is the raw body."""

    kind = UPSTREAM
    status_hint = UPSTREAM

    def __init__(self, provider: str, status_code: int, body: str):
        self.provider = provider
        self.status_code = status_code
        super().__init__(body)


class InternalError(GenerationError):
    """Unexpected failure while calling a provider or reading its response."""
