"""Secret store access.

This module defines the narrow interface the copy pipeline needs from
the cluster and its implementation on top of the Kubernetes API.
"""

from http import HTTPStatus
from typing import Protocol

from icecream import ic
from kubernetes import client
from kubernetes.client import V1Secret
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from kubectl_copy_secret.exceptions import (
    SecretAlreadyExistsError,
    SecretNotFoundError,
    SecretStoreError,
    StoreUnreachableError,
)

class SecretStore(Protocol):
    """Namespaced secret storage.

    Implementations raise SecretNotFoundError from get() when the secret is
    absent, SecretAlreadyExistsError from create() when the name is taken,
    and another SecretStoreError for any other failure.
    """

    def get(self, namespace: str, name: str) -> V1Secret: ...

    def list(self, namespace: str) -> list[V1Secret]: ...

    def create(self, namespace: str, secret: V1Secret) -> V1Secret: ...


def _translate_api_error(err: ApiException, *, namespace: str, name: str | None = None) -> SecretStoreError:
    """Map an ApiException onto the store's exception hierarchy.

    Args:
        err: The exception raised by the Kubernetes client.
        namespace: Namespace the failed call was scoped to.
        name: Secret name the call addressed, if any.

    Returns:
        The matching SecretStoreError subclass instance.

    """
    target = f"{namespace}/{name}" if name else namespace
    message = f"{err.status} {err.reason} ({target})"
    match err.status:
        case HTTPStatus.NOT_FOUND:
            error_cls: type[SecretStoreError] = SecretNotFoundError
        case HTTPStatus.CONFLICT:
            error_cls = SecretAlreadyExistsError
        case _:
            error_cls = SecretStoreError
    return error_cls(message, namespace=namespace, name=name, status=err.status)


def _unreachable(err: HTTPError, *, namespace: str, name: str | None = None) -> StoreUnreachableError:
    """Wrap any urllib3 transport failure into StoreUnreachableError."""
    reason = getattr(err, "reason", None) or err
    return StoreUnreachableError(
        f"Failed to connect to the Kubernetes cluster: {reason}", namespace=namespace, name=name
    )


class KubernetesSecretStore:
    """SecretStore backed by the Kubernetes CoreV1 API.

    Every method issues exactly one API call.

    Attributes:
        api: The CoreV1Api client used for all calls.

    """

    def __init__(self, api: client.CoreV1Api | None = None) -> None:
        self.api: client.CoreV1Api = api if api is not None else client.CoreV1Api()

    def get(self, namespace: str, name: str) -> V1Secret:
        """Read a single secret.

        Raises:
            SecretNotFoundError: If the secret does not exist.
            StoreUnreachableError: If the API server cannot be reached.
            SecretStoreError: For any other API failure.

        """
        ic(namespace, name)
        try:
            return self.api.read_namespaced_secret(name=name, namespace=namespace)
        except ApiException as e:
            raise _translate_api_error(e, namespace=namespace, name=name) from e
        except HTTPError as e:
            raise _unreachable(e, namespace=namespace, name=name) from e

    def list(self, namespace: str) -> list[V1Secret]:
        """List every secret in a namespace, in API server order.

        Raises:
            StoreUnreachableError: If the API server cannot be reached.
            SecretStoreError: For any API failure.

        """
        ic(namespace)
        try:
            return list(self.api.list_namespaced_secret(namespace=namespace).items)
        except ApiException as e:
            raise _translate_api_error(e, namespace=namespace) from e
        except HTTPError as e:
            raise _unreachable(e, namespace=namespace) from e

    def create(self, namespace: str, secret: V1Secret) -> V1Secret:
        """Create a secret; never falls back to an update.

        Raises:
            SecretAlreadyExistsError: If a secret of that name already exists.
            StoreUnreachableError: If the API server cannot be reached.
            SecretStoreError: For any other API failure.

        """
        name = secret.metadata.name
        ic(namespace, name)
        try:
            return self.api.create_namespaced_secret(namespace=namespace, body=secret)
        except ApiException as e:
            raise _translate_api_error(e, namespace=namespace, name=name) from e
        except HTTPError as e:
            raise _unreachable(e, namespace=namespace, name=name) from e
