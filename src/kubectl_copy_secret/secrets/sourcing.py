"""Secret sourcing.

This module resolves a selector against the origin namespace into the
ordered list of secrets to copy.
"""

from icecream import ic

from kubectl_copy_secret.exceptions import SecretNotFoundError, SecretStoreError, SourceEnumerationError
from kubectl_copy_secret.models import AllSecrets, ByName, CopyOutcome, OutcomeStatus, Selector, SourcingResult
from kubectl_copy_secret.store import SecretStore


def source_by_name(store: SecretStore, namespace: str, names: tuple[str, ...]) -> SourcingResult:
    """Look up each named secret once, in the given order.

    Lookups that fail never abort sourcing. A missing secret is recorded as
    not-found; any other store failure is recorded as lookup-failed, since
    the secret may well exist.

    Args:
        store: Store to read from.
        namespace: The origin namespace.
        names: Secret names in caller order.

    Returns:
        The found secrets plus one skipped outcome per name that was not found.

    """
    found = []
    skipped = []
    for name in names:
        try:
            found.append(store.get(namespace, name))
        except SecretNotFoundError:
            skipped.append(CopyOutcome(name=name, namespace=namespace, status=OutcomeStatus.NOT_FOUND))
        except SecretStoreError as err:
            skipped.append(
                CopyOutcome(name=name, namespace=namespace, status=OutcomeStatus.LOOKUP_FAILED, reason=str(err))
            )
    ic(skipped)
    return SourcingResult(secrets=tuple(found), skipped=tuple(skipped))


def source_all(store: SecretStore, namespace: str) -> SourcingResult:
    """List every secret in the namespace with a single call.

    An empty namespace is not an error.

    Raises:
        SourceEnumerationError: If the listing itself fails.

    """
    try:
        secrets = store.list(namespace)
    except SecretStoreError as err:
        raise SourceEnumerationError(namespace, err) from err
    return SourcingResult(secrets=tuple(secrets))


def source_secrets(store: SecretStore, namespace: str, selector: Selector) -> SourcingResult:
    """Resolve a selector against the origin namespace.

    Args:
        store: Store to read from.
        namespace: The origin namespace.
        selector: ByName or AllSecrets.

    Returns:
        The SourcingResult for the selector.

    Raises:
        SourceEnumerationError: If all-secrets listing fails.

    """
    match selector:
        case ByName(names=names):
            return source_by_name(store, namespace, names)
        case AllSecrets():
            return source_all(store, namespace)
    raise TypeError(f"Unsupported selector: {selector!r}")
