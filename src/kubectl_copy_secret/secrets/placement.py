"""Secret placement in the destination namespace."""

from icecream import ic
from kubernetes.client import V1Secret

from kubectl_copy_secret.exceptions import SecretStoreError
from kubectl_copy_secret.models import CopyOutcome, OutcomeStatus
from kubectl_copy_secret.store import SecretStore


def place_secret(store: SecretStore, secret: V1Secret, destination: str) -> CopyOutcome:
    """Create a prepared secret in the destination namespace.

    Exactly one create call is made. A failure, including an existing
    secret of the same name, is returned as an outcome instead of raised.

    Args:
        store: Store to write to.
        secret: Secret already prepared for the destination.
        destination: The destination namespace.

    Returns:
        A COPIED or CREATE_FAILED outcome.

    """
    name = secret.metadata.name
    try:
        store.create(destination, secret)
    except SecretStoreError as err:
        ic(name, err)
        return CopyOutcome(name=name, namespace=destination, status=OutcomeStatus.CREATE_FAILED, reason=str(err))
    return CopyOutcome(name=name, namespace=destination, status=OutcomeStatus.COPIED)
