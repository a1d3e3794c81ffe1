"""kubectl-copy-secret: copy Kubernetes secrets between namespaces.

This package provides the `kubectl copy-secret` plugin and the pieces it is
built from, usable on their own.

Example usage:
    from kubectl_copy_secret import ByName, CopyRequest, KubernetesSecretStore, SecretCopier

    copier = SecretCopier(KubernetesSecretStore())
    report = copier.run(CopyRequest(origin="team-a", destination="team-b", selector=ByName(names=("db-creds",))))
"""

__version__ = "0.1.0"

from kubectl_copy_secret.cli import cli
from kubectl_copy_secret.cluster import Cluster
from kubectl_copy_secret.core.copier import SecretCopier
from kubectl_copy_secret.exceptions import (
    ClusterConnectionError,
    CopySecretError,
    SecretAlreadyExistsError,
    SecretNotFoundError,
    SecretStoreError,
    SourceEnumerationError,
    StoreUnreachableError,
)
from kubectl_copy_secret.models import (
    AllSecrets,
    ByName,
    CopyOutcome,
    CopyReport,
    CopyRequest,
    OutcomeStatus,
)
from kubectl_copy_secret.store import KubernetesSecretStore, SecretStore

__all__ = [
    # Version
    "__version__",
    # Main CLI
    "cli",
    # Classes
    "Cluster",
    "SecretCopier",
    "KubernetesSecretStore",
    "SecretStore",
    # Models
    "AllSecrets",
    "ByName",
    "CopyOutcome",
    "CopyReport",
    "CopyRequest",
    "OutcomeStatus",
    # Exceptions
    "CopySecretError",
    "ClusterConnectionError",
    "SecretStoreError",
    "SecretNotFoundError",
    "SecretAlreadyExistsError",
    "StoreUnreachableError",
    "SourceEnumerationError",
]
