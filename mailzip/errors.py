from typing import Optional


class MailzipError(Exception):
    """Base class for mailzip-specific errors."""


# Input validation
class InputError(MailzipError):
    def __init__(self, message: str, index: Optional[int] = None):
        if index is not None:
            message = f"entry {index}: {message}"
        super().__init__(message)
        self.index = index


class UnsafePathError(InputError):
    pass


class EncodingError(MailzipError):
    """A name or payload could not be encoded with the archive's text encoding."""

    def __init__(self, index: int, name: object, encoding: str, detail: str = ""):
        msg = f"entry {index} ({name!r}) cannot be encoded as {encoding}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
        self.index = index
        self.name = name
        self.encoding = encoding


# Classic record layout limits
class ArchiveLimitError(MailzipError):
    pass
