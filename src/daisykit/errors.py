# ABOUTME: Exception hierarchy for DAISY document parsing and metadata patching.
# ABOUTME: Lookup misses are not errors; only structurally required elements raise.


class DaisyError(Exception):
    """Base class for all daisykit errors."""


class MalformedXmlError(DaisyError):
    """Raised when the XML parser cannot produce a tree from the input."""


class MissingRootElementError(DaisyError):
    """Raised when a format parser cannot find its root element."""

    def __init__(self, tag: str, file_kind: str | None = None) -> None:
        self.tag = tag
        kind = file_kind or tag.upper()
        super().__init__(f"Invalid {kind} file: no {tag} element found")


class MissingContainerError(DaisyError):
    """Raised when an updater cannot find the element that holds metadata."""

    def __init__(self, tag: str, file_kind: str | None = None) -> None:
        self.tag = tag
        kind = file_kind or "DAISY"
        super().__init__(f"Invalid {kind} file: no {tag} element found")
