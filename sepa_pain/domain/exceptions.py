"""Domain-specific exceptions"""

from typing import Any


class SepaException(Exception):
    """Base exception for the document engine"""

    pass


class InputError(SepaException):
    """Checksum input contains characters outside A-Z and 0-9"""

    pass


class StructuralError(SepaException):
    """Wrong entity type handed to an aggregate"""

    pass


class ConfigurationError(SepaException):
    """Unknown or unsupported pain format"""

    pass


class ValidationError(SepaException):
    """A field failed a format, length, range, charset or cross-field rule"""

    def __init__(self, field: str, value: Any, message: str):
        super().__init__(message)
        self.field = field
        self.value = value
