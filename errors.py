"""Exception types raised by pipeline stages.

Every stage raises one of these and nothing is recovered internally:
the pipeline catches the first error once, logs it, and turns it into a
failed RunResult.

    PipelineError
    ├── UpstreamError           non-success HTTP status from an external API
    ├── MalformedResponseError  expected field missing from a successful reply
    └── StorageError            document creation failed
"""


class PipelineError(Exception):
    """Base class for all pipeline stage failures."""


class UpstreamError(PipelineError):
    """An external API answered with a non-success HTTP status.

    Attributes:
        service: Human-readable API name (e.g. 'Perplexity')
        status: HTTP status code
        detail: Response body text when the API returns structured errors
    """

    def __init__(self, service: str, status: int, detail: str = ""):
        self.service = service
        self.status = status
        self.detail = detail
        super().__init__(f"{service} API Error: {detail or status}")


class MalformedResponseError(PipelineError):
    """A successful response lacked the field the stage needs."""

    def __init__(self, service: str, detail: str):
        self.service = service
        self.detail = detail
        super().__init__(f"{service} returned a malformed response: {detail}")


class StorageError(PipelineError):
    """The document store refused or failed to create a document.

    Attributes:
        status: HTTP status from the store, or None for transport failures
    """

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(f"Storage Error: {message}")
