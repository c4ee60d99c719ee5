"""Exceptions raised while loading and composing API documents."""


class PandaDocsError(Exception):
    """Base class for every error raised by panda_docs."""


class DocumentNotFoundError(PandaDocsError):
    """A document path could not be read from the project root."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"Unable to read {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DocumentParseError(PandaDocsError):
    """A document's text is not valid JSON, even after repair."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Parse json file {path} error: {reason}")


class MalformedDocumentError(PandaDocsError):
    """A document parsed but its top-level shape is unusable."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed document {path}: {reason}")
