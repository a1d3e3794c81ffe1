"""Shared test fixtures for kubectl-copy-secret tests."""

from unittest.mock import MagicMock, patch

import pytest
from kubernetes.client import V1ObjectMeta, V1Secret

from kubectl_copy_secret.exceptions import SecretAlreadyExistsError, SecretNotFoundError


def make_secret(name: str, namespace: str = "origin", **kwargs) -> V1Secret:
    """Build a secret the way the API server returns it."""
    return V1Secret(
        api_version=kwargs.pop("api_version", "v1"),
        kind=kwargs.pop("kind", "Secret"),
        metadata=V1ObjectMeta(
            name=name,
            namespace=namespace,
            uid=f"uid-{name}",
            resource_version="12345",
            labels=kwargs.pop("labels", {"app": "demo"}),
            annotations=kwargs.pop("annotations", {"owner": "team-a"}),
            owner_references=kwargs.pop("owner_references", None),
        ),
        type=kwargs.pop("type", "Opaque"),
        data=kwargs.pop("data", {"password": "cGFzc3dvcmQ="}),
        string_data=kwargs.pop("string_data", None),
        immutable=kwargs.pop("immutable", None),
    )


class FakeSecretStore:
    """In-memory SecretStore double.

    Failures are injected per call through the *_errors dictionaries and
    every call is recorded in `calls`.
    """

    def __init__(self) -> None:
        self.namespaces: dict[str, dict[str, V1Secret]] = {}
        self.calls: list[tuple[str, str, str | None]] = []
        self.get_errors: dict[tuple[str, str], Exception] = {}
        self.list_errors: dict[str, Exception] = {}
        self.create_errors: dict[tuple[str, str], Exception] = {}

    def add(self, secret: V1Secret) -> None:
        self.namespaces.setdefault(secret.metadata.namespace, {})[secret.metadata.name] = secret

    def names_in(self, namespace: str) -> list[str]:
        return list(self.namespaces.get(namespace, {}))

    def get(self, namespace: str, name: str) -> V1Secret:
        self.calls.append(("get", namespace, name))
        if (namespace, name) in self.get_errors:
            raise self.get_errors[(namespace, name)]
        try:
            return self.namespaces[namespace][name]
        except KeyError:
            raise SecretNotFoundError(
                f"404 Not Found ({namespace}/{name})", namespace=namespace, name=name, status=404
            ) from None

    def list(self, namespace: str) -> list[V1Secret]:
        self.calls.append(("list", namespace, None))
        if namespace in self.list_errors:
            raise self.list_errors[namespace]
        return list(self.namespaces.get(namespace, {}).values())

    def create(self, namespace: str, secret: V1Secret) -> V1Secret:
        name = secret.metadata.name
        self.calls.append(("create", namespace, name))
        if (namespace, name) in self.create_errors:
            raise self.create_errors[(namespace, name)]
        if name in self.namespaces.get(namespace, {}):
            raise SecretAlreadyExistsError(
                f"409 Conflict ({namespace}/{name})", namespace=namespace, name=name, status=409
            )
        self.namespaces.setdefault(namespace, {})[name] = secret
        return secret


@pytest.fixture
def store():
    """Empty in-memory secret store."""
    return FakeSecretStore()


@pytest.fixture
def populated_store(store):
    """Store with secrets a, b and c in the origin namespace."""
    for name in ["a", "b", "c"]:
        store.add(make_secret(name))
    return store


@pytest.fixture
def mock_kube_contexts():
    """Mock kubernetes config contexts."""
    with patch("kubernetes.config.list_kube_config_contexts") as mock:
        mock.return_value = (
            [{"name": "test-context"}, {"name": "other-context"}],
            {"name": "test-context"},
        )
        yield mock


@pytest.fixture
def mock_kube_config():
    """Mock kubernetes config loading."""
    with patch("kubernetes.config.load_kube_config") as mock:
        yield mock


@pytest.fixture
def mock_incluster_config():
    """Mock in-cluster config loading."""
    with patch("kubernetes.config.load_incluster_config") as mock:
        yield mock


@pytest.fixture
def mock_core_v1_api():
    """Mock CoreV1Api instance."""
    with patch("kubernetes.client.CoreV1Api") as mock:
        api_instance = MagicMock()
        mock.return_value = api_instance
        yield api_instance


@pytest.fixture
def secret_factory():
    """Factory building origin-style secrets."""
    return make_secret
