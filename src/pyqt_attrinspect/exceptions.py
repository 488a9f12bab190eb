"""Inspector exceptions."""


class InspectorError(Exception):
    """Base class for all inspector errors."""


class AnnotationError(InspectorError):
    """Raised when an inspector annotation is declared with malformed arguments."""


class MemberAccessError(InspectorError):
    """Raised when a member's current value cannot be read from its owner."""


class WriteBackError(InspectorError):
    """Raised when a (possibly nested) value cannot be written back into its owner."""
