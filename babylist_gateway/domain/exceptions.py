"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class SourceDataError(DomainException):
    """List service returned an error, is unavailable, or sent an unreadable record"""

    pass


class LookupFailure(DomainException):
    """A catalog, recommendation, loyalty or reservation lookup failed"""

    def __init__(self, collaborator: str, message: str):
        super().__init__(f"{collaborator} lookup failed: {message}")
        self.collaborator = collaborator
