"""Domain error hierarchy shared by services and the HTTP layer."""


class VirtualFridgeError(Exception):
    """Base class for application errors."""


class NotFoundError(VirtualFridgeError):
    """Raised when a requested entity does not exist or is not visible."""


class ConflictError(VirtualFridgeError):
    """Raised when an entity already exists."""


class AuthenticationError(VirtualFridgeError):
    """Raised when an identity token cannot be verified."""


class ValidationFailedError(VirtualFridgeError):
    """Raised when input passes schema checks but violates a business rule."""


class RepositoryError(VirtualFridgeError, RuntimeError):
    """Raised when a persistence operation fails."""


class ExternalServiceError(VirtualFridgeError):
    """Raised when a third-party API returns an unusable response."""


class PushNotConfiguredError(VirtualFridgeError):
    """Raised when push delivery is attempted without valid credentials."""


class PushDeliveryError(VirtualFridgeError):
    """Raised when the messaging service rejects a push."""
