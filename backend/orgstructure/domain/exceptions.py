"""Domain-specific exceptions — framework-independent.

Every failure a service can report is one of these, so callers discriminate
on the exception type instead of parsing messages.
"""


class DomainError(Exception):
    """Base class for all business-rule failures."""


class EntityNotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(DomainError):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class HierarchyCycleError(DomainError):
    """Raised when a parent assignment would make a structure its own ancestor."""

    def __init__(self, structure_id: int, parent_id: int):
        self.structure_id = structure_id
        self.parent_id = parent_id
        if structure_id == parent_id:
            message = f"Structure {structure_id} cannot be its own parent"
        else:
            message = (
                f"Circular reference detected: structure {structure_id} "
                f"is an ancestor of proposed parent {parent_id}"
            )
        super().__init__(message)


class HierarchyDepthError(HierarchyCycleError):
    """Raised when a parent chain is too deep (or loops) to prove a move is cycle-free."""

    def __init__(self, structure_id: int, parent_id: int, max_depth: int):
        self.structure_id = structure_id
        self.parent_id = parent_id
        self.max_depth = max_depth
        DomainError.__init__(
            self,
            f"Cannot attach structure {structure_id} under {parent_id}: the parent "
            f"chain of {parent_id} exceeds {max_depth} levels or loops",
        )


class HasChildrenError(DomainError):
    """Raised when deleting a structure that still has direct children."""

    def __init__(self, structure_id: int, children_count: int):
        self.structure_id = structure_id
        self.children_count = children_count
        super().__init__(
            f"Cannot delete structure {structure_id} because it has "
            f"{children_count} child structure(s)"
        )


class EntityInUseError(DomainError):
    """Raised when deleting a reference entity that other rows still point to."""

    def __init__(self, entity_type: str, entity_id: int | str, usage_count: int):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.usage_count = usage_count
        super().__init__(
            f"Cannot delete {entity_type} {entity_id} because it is used by "
            f"{usage_count} record(s)"
        )


class ValidationError(DomainError):
    """Raised when a required field is missing or an argument is out of range."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)
