"""Hard-failure error for CSV imports."""


class CSVImportError(ValueError):
    """Raised when an import must be rejected as a whole.

    Covers structural CSV problems (encoding, column counts, size limits,
    formula payloads) and a missing tenant. The message is user-facing and
    is returned verbatim in the HTTP 400 body. Nothing has been written to
    the data store when this is raised.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
