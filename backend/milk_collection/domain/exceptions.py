"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist (or is not visible to the caller)."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class EntityInUseError(Exception):
    """Raised when an entity cannot be removed because other records depend on it."""

    def __init__(self, entity_type: str, entity_id: int | str, reason: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(f"{entity_type} with id '{entity_id}' is in use: {reason}")


class InvalidFieldError(Exception):
    """Raised when a required field is missing or holds an invalid value."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InvalidCredentialsError(Exception):
    """Raised when a supplied password does not match the stored one."""

    def __init__(self, message: str = "Credentials are incorrect"):
        self.message = message
        super().__init__(message)


class PermissionDeniedError(Exception):
    """Raised when the actor lacks the role required for an operation."""

    def __init__(self, message: str = "Insufficient permissions"):
        self.message = message
        super().__init__(message)
