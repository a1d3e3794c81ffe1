"""Custom exceptions for kubectl-copy-secret.

This module defines the exception hierarchy used throughout the application
to provide meaningful error messages and proper error handling.
"""


class CopySecretError(Exception):
    """Base exception for all kubectl-copy-secret errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all copy-secret errors with a single
    except clause if desired.
    """

    pass


class ClusterConnectionError(CopySecretError):
    """Raised when no usable cluster configuration can be loaded.

    This can occur when:
    - The kubeconfig is invalid or missing
    - The requested context does not exist
    - The process is not running inside a cluster either
    """

    pass


class SecretStoreError(CopySecretError):
    """Raised when a call against the secret store fails.

    Attributes:
        namespace: The namespace the call was scoped to.
        name: The secret name, if the call addressed a single secret.
        status: The HTTP status reported by the API server, if any.

    """

    def __init__(self, message: str, *, namespace: str, name: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.namespace = namespace
        self.name = name
        self.status = status


class SecretNotFoundError(SecretStoreError):
    """Raised when the requested secret does not exist in the namespace."""

    pass


class SecretAlreadyExistsError(SecretStoreError):
    """Raised when creating a secret whose name is already taken in the namespace."""

    pass


class StoreUnreachableError(SecretStoreError):
    """Raised when the API server cannot be reached at all.

    This typically means:
    - The cluster endpoint is down or the network is unavailable
    - The kubeconfig points at the wrong server
    """

    pass


class SourceEnumerationError(CopySecretError):
    """Raised when listing the secrets of the origin namespace fails.

    This is the only failure that aborts a copy run: without the listing
    there is no working set to place, so the destination is left untouched.
    """

    def __init__(self, namespace: str, cause: Exception) -> None:
        super().__init__(f"error getting all secrets from {namespace!r}: {cause}")
        self.namespace = namespace
        self.cause = cause
