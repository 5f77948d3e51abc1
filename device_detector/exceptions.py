"""
Custom exceptions for Device Detector.
"""


class DeviceDetectorError(Exception):
    """Base exception class for all Device Detector errors."""
    pass


class RegistryError(DeviceDetectorError):
    """Raised when a static registry is inconsistent at build time."""

    def __init__(self, message: str, registry: str = None):
        self.registry = registry

        if registry:
            message = f"Invalid {registry} registry: {message}"

        super().__init__(message)


class RuleSetError(DeviceDetectorError):
    """Raised when a rule definition file cannot be loaded."""

    def __init__(self, message: str, file_path: str = None, entry_index: int = None):
        self.file_path = file_path
        self.entry_index = entry_index

        if file_path:
            message = f"Rule set error in '{file_path}': {message}"
            if entry_index is not None:
                message += f" (entry {entry_index})"

        super().__init__(message)


class ConfigurationError(DeviceDetectorError):
    """Raised when configuration is invalid."""
    pass
