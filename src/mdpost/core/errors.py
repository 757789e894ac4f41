"""Parse error taxonomy for front-matter documents"""


class ParseError(ValueError):
    """Base class for every failure raised by parse()."""


class MalformedDocument(ParseError):
    """Front-matter delimiters are missing/mismatched or the block is not a mapping."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed document: {reason}")


class MissingRequiredField(ParseError):
    """A mandatory field (title, date) is absent or empty."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing required field: {name}")


class InvalidFieldValue(ParseError):
    """A recognized field is present but does not have the expected shape."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid value for '{name}': {reason}")
