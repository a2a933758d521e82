"""
Custom exceptions for the web app deployer.

Exception Hierarchy:
    DeploymentError (base)
    ├── ConfigurationError - Invalid or missing configuration / credentials
    ├── ResourceCreationError - Failed to create cloud resource
    ├── ResourceDeletionError - Failed to delete cloud resource
    └── PublishProfileError - Publishing profile missing or unusable
"""

from typing import Optional


class DeploymentError(Exception):
    """
    Base exception for all deployment-related errors.

    Attributes:
        message: Human-readable error description
        step: Optional name of the orchestrator step where the error occurred
    """

    def __init__(self, message: str, step: Optional[str] = None):
        self.message = message
        self.step = step
        super().__init__(message)

    def __str__(self) -> str:
        # step may be attached after construction by the orchestrator
        if self.step:
            return f"{self.message} [step={self.step}]"
        return self.message


class ConfigurationError(DeploymentError):
    """
    Raised when configuration is invalid or missing required fields.

    This typically occurs when:
    - A required credential environment variable is not set
    - The config file has invalid JSON
    - The config file contains an unknown key

    Example:
        >>> load_sample_config(Path("broken.json"))
        ConfigurationError: Invalid JSON in configuration file: ... (file: broken.json)
    """

    def __init__(self, message: str, config_file: Optional[str] = None):
        self.config_file = config_file
        if config_file:
            message = f"{message} (file: {config_file})"
        super().__init__(message)


class ResourceCreationError(DeploymentError):
    """
    Raised when a cloud resource fails to create or is unusable after creation.

    Attributes:
        resource_type: Type of resource (e.g., "storage account key")
        resource_name: Name of the resource that failed
        original_error: The underlying SDK exception, if any
    """

    def __init__(
        self,
        resource_type: str,
        resource_name: str,
        original_error: Optional[Exception] = None,
        reason: Optional[str] = None
    ):
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.original_error = original_error

        message = f"Failed to create {resource_type} '{resource_name}'"
        if reason:
            message += f": {reason}"
        elif original_error:
            message += f": {str(original_error)}"

        super().__init__(message)


class ResourceDeletionError(DeploymentError):
    """
    Raised when a cloud resource fails to delete.

    Attributes:
        resource_type: Type of resource (e.g., "resource group")
        resource_name: Name of the resource that failed
        original_error: The underlying SDK exception
    """

    def __init__(
        self,
        resource_type: str,
        resource_name: str,
        original_error: Optional[Exception] = None
    ):
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.original_error = original_error

        message = f"Failed to delete {resource_type} '{resource_name}'"
        if original_error:
            message += f": {str(original_error)}"

        super().__init__(message)


class PublishProfileError(DeploymentError):
    """Raised when the publishing profile XML has no usable FTP profile."""
