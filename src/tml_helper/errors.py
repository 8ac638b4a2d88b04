# src/tml_helper/errors.py

class TemplateError(Exception):
    """Base class for every failure raised by tml-helper."""
    def __init__(self, message, **kwargs):
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class TemplateNotFoundError(TemplateError):
    """Raised when a display name is not present in the resolved catalog."""
    pass


class TemplateReadError(TemplateError):
    """Raised when a selected template file cannot be read."""
    pass


# --- Output errors ---
class OutputExistsError(TemplateError):
    """Raised when the generated file would overwrite an existing file."""
    pass


class TemplateWriteError(TemplateError):
    """Raised when the generated file cannot be written."""
    pass
# --- End output errors ---


class InvalidInputError(TemplateError):
    """Raised when a class name or extra variable fails validation."""
    pass
