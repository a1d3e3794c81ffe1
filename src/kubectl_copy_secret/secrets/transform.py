"""Secret transformation for re-creation in another namespace."""

from kubernetes.client import V1ObjectMeta, V1Secret


def prepare_for_destination(secret: V1Secret, destination: str) -> V1Secret:
    """Build a fresh secret for creation in the destination namespace.

    Name, type, immutability, payload and the apiVersion/kind pair are kept.
    The namespace is replaced; every other piece of metadata (uid,
    resourceVersion, timestamps, owner references, labels, annotations)
    is dropped so the result is a new object rather than an update.

    Args:
        secret: The secret as read from the origin namespace.
        destination: The destination namespace.

    Returns:
        A new V1Secret; the input is left untouched.

    """
    return V1Secret(
        api_version=secret.api_version,
        kind=secret.kind,
        metadata=V1ObjectMeta(name=secret.metadata.name, namespace=destination),
        immutable=secret.immutable,
        data=dict(secret.data) if secret.data is not None else None,
        string_data=dict(secret.string_data) if secret.string_data is not None else None,
        type=secret.type,
    )
