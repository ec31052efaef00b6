"""Custom exception classes for the file service."""


class FileServiceError(Exception):
    """
    Base exception class for all file service errors.
    """
    pass


class BackendUnavailableError(FileServiceError):
    """
    Raised when a storage backend cannot be reached or refuses the request
    (network, credential or permission failures).
    """
    pass


class UnsupportedOperationError(FileServiceError):
    """
    Raised when a backend does not implement the requested capability.
    """
    pass


class InvariantViolationError(FileServiceError):
    """
    Raised when an operation breaks an internal contract, such as copying
    a file onto itself.
    """
    pass
