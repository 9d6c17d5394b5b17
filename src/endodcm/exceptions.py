class EndoDcmError(Exception):
    """Base class for errors raised while converting an endoscopic manifest."""

    pass


####################################################################################################
# Manifest specific exceptions


class ManifestUnreadableError(EndoDcmError):
    """The manifest file could not be opened or is not well-formed XML."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to read manifest '{path}': {reason}")


####################################################################################################
# Attribute mapping exceptions


class MalformedDateError(EndoDcmError, ValueError):
    """A date-bearing manifest field does not match its required format."""

    def __init__(self, field: str, value: str, expected_format: str) -> None:
        self.field = field
        self.value = value
        self.expected_format = expected_format
        super().__init__(
            f"Field '{field}' has value {value!r} which does not match "
            f"the required format '{expected_format}'"
        )
