"""Engine error types."""

from __future__ import annotations


class LibraryResourcesError(Exception):
    """Base exception for expected, user-facing failures."""


class ResourceNotFoundError(LibraryResourcesError):
    """Raised when a name is unknown to both registries."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Resource '{name}' not found.")
        self.name = name


class DuplicateResourceError(LibraryResourcesError):
    """Raised when adding a name that already resolves in either scope."""

    def __init__(self, name: str, existing_scope: str) -> None:
        super().__init__(
            f"Resource '{name}' already exists ({existing_scope}). "
            "Remove it first or use a different name."
        )
        self.name = name
        self.existing_scope = existing_scope


class InvalidResourceNameError(LibraryResourcesError):
    """Raised when a name cannot be used as a directory name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Invalid resource name: '{name}'. Names must be a single path component."
        )
        self.name = name


class NotClonedError(LibraryResourcesError):
    """Raised when a resource is registered but has no working copy."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Resource '{name}' is not cloned. Run 'restore {name}' first.")
        self.name = name


class FileNotFoundInResourceError(LibraryResourcesError):
    """Raised when a requested file does not exist in a working copy."""

    def __init__(self, file_path: str) -> None:
        super().__init__(f"File not found: {file_path}\n\nUse tree to see available files.")
        self.file_path = file_path


class IsDirectoryError(LibraryResourcesError):
    """Raised when read targets a directory."""

    def __init__(self, file_path: str) -> None:
        super().__init__(f"'{file_path}' is a directory. Use tree to list its contents.")
        self.file_path = file_path


class PathNotFoundError(LibraryResourcesError):
    """Raised when a tree subpath does not exist."""

    def __init__(self, subpath: str) -> None:
        super().__init__(f"Path not found: {subpath or '/'}")
        self.subpath = subpath


class PathOutsideResourceError(LibraryResourcesError):
    """Raised when a relative path escapes the resource root."""

    def __init__(self, name: str, path: str) -> None:
        super().__init__(f"Path '{path}' is outside resource '{name}'.")
        self.name = name
        self.path = path


class ProviderError(LibraryResourcesError):
    """An external tool exited non-zero or could not be run."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        self.message = message.strip() or "unknown error"
        super().__init__(f"Error {operation}: {self.message}")
