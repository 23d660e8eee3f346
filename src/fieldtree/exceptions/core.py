"""
Exception classes for field tree construction and lookup.

Build-time errors (unresolved types, missing or invalid parents, rejected
attributes) abort the whole build. Lookup errors are raised to the caller,
who decides on a fallback. Per-field validation failures are never raised;
they are recorded on the field nodes.
"""


class FieldTreeError(Exception):
    """Base exception for all fieldtree errors."""

    pass


class DeclarationError(FieldTreeError):
    """Raised when a field declaration cannot be normalized."""

    def __init__(self, declaration: object, reason: str):
        """
        Initialize the exception.

        Params:
            declaration: The offending declaration (name or raw record)
            reason: Why the declaration was rejected
        """
        self.declaration = declaration
        self.reason = reason
        super().__init__(f"Invalid field declaration {declaration!r}: {reason}")


class UnresolvedFieldTypeError(FieldTreeError):
    """Raised when a declared field type cannot be resolved to a field class."""

    def __init__(
        self, type_name: str, field_name: str | None, candidates: list[str]
    ):
        """
        Initialize the exception.

        Params:
            type_name: The declared type as written in the declaration
            field_name: The field whose declaration named the type
            candidates: Fully-qualified registry keys that were tried
        """
        self.type_name = type_name
        self.field_name = field_name
        self.candidates = candidates
        tried = ", ".join(candidates) if candidates else "nothing"
        super().__init__(
            f"Could not resolve field type '{type_name}' for field "
            f"'{field_name}' (tried: {tried})"
        )


class UnknownParentError(FieldTreeError):
    """Raised when a dotted declaration names a parent that does not exist."""

    def __init__(self, field_name: str, parent_path: str):
        """
        Initialize the exception.

        Params:
            field_name: Full dotted name of the declared field
            parent_path: The parent path that could not be resolved
        """
        self.field_name = field_name
        self.parent_path = parent_path
        super().__init__(
            f"The parent '{parent_path}' of field '{field_name}' does not exist"
        )


class InvalidParentTypeError(FieldTreeError):
    """Raised when the resolved parent of a declaration cannot hold children."""

    def __init__(self, field_name: str, parent_path: str):
        """
        Initialize the exception.

        Params:
            field_name: Full dotted name of the declared field
            parent_path: Full path of the parent that cannot contain children
        """
        self.field_name = field_name
        self.parent_path = parent_path
        super().__init__(
            f"The parent '{parent_path}' of field '{field_name}' is not a compound field"
        )


class FieldInstantiationError(FieldTreeError):
    """Raised when a field class rejects the declared attributes."""

    def __init__(self, field_name: str, reason: str):
        """
        Initialize the exception.

        Params:
            field_name: Name of the field that failed to instantiate
            reason: The underlying reason for the failure
        """
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"Cannot instantiate field '{field_name}': {reason}")


class FieldTypeError(FieldTreeError):
    """Raised when something other than a field class is registered as a type."""

    def __init__(self, type_name: str, message: str = "is not a Field subclass"):
        """
        Initialize the exception.

        Params:
            type_name: The registry name being registered
            message: Specific error message
        """
        self.type_name = type_name
        super().__init__(f"Field type '{type_name}' {message}")


class FieldNotFoundError(FieldTreeError):
    """Raised by strict lookups when a field path does not resolve."""

    def __init__(self, field_path: str, container: str, message: str = "not found"):
        """
        Initialize the exception.

        Params:
            field_path: The path that was looked up
            container: Identity of the container the lookup started from
            message: Specific error message
        """
        self.field_path = field_path
        self.container = container
        super().__init__(f"Field '{field_path}' {message} in '{container}'")
