"""Tests for core/copier.py module."""

from http.client import RemoteDisconnected
from unittest.mock import MagicMock

import pytest
from urllib3.exceptions import ProtocolError

from kubectl_copy_secret.core.copier import SecretCopier
from kubectl_copy_secret.exceptions import SecretStoreError, SourceEnumerationError
from kubectl_copy_secret.models import AllSecrets, ByName, CopyRequest, CopyState, EventKind, OutcomeStatus
from kubectl_copy_secret.store import KubernetesSecretStore


def _by_name(*names: str, destination: str = "ns2") -> CopyRequest:
    return CopyRequest(origin="origin", destination=destination, selector=ByName(names=names))


def _all(destination: str = "ns2") -> CopyRequest:
    return CopyRequest(origin="origin", destination=destination, selector=AllSecrets())


class TestCopierByName:
    """Tests for copying named secrets."""

    def test_mixed_found_and_missing(self, populated_store):
        """Test origin {a, b, c} with --secret a,x,c copies a then c and skips x once."""
        copier = SecretCopier(populated_store)

        report = copier.run(_by_name("a", "x", "c"))

        assert report.sourced == ["a", "c"]
        assert report.copied == ["a", "c"]
        assert [c for c in populated_store.calls if c[0] == "create"] == [
            ("create", "ns2", "a"),
            ("create", "ns2", "c"),
        ]
        skip_events = [e for e in report.events if e.kind is EventKind.SKIPPED_NOT_FOUND]
        assert len(skip_events) == 1
        assert skip_events[0].names == ("x",)
        assert copier.state is CopyState.DONE

    def test_placed_secrets_use_destination_namespace(self, populated_store):
        """Test every created secret is namespaced to the destination."""
        SecretCopier(populated_store).run(_by_name("a", "b", destination="elsewhere"))

        placed = populated_store.namespaces["elsewhere"]
        assert sorted(placed) == ["a", "b"]
        assert all(secret.metadata.namespace == "elsewhere" for secret in placed.values())

    def test_all_missing_completes(self, store):
        """Test nothing is placed when none of the names exist."""
        copier = SecretCopier(store)

        report = copier.run(_by_name("x", "y"))

        assert report.sourced == []
        assert [o.status for o in report.outcomes] == [OutcomeStatus.NOT_FOUND, OutcomeStatus.NOT_FOUND]
        assert copier.state is CopyState.DONE

    def test_lookup_failures_are_aggregated_separately(self, populated_store):
        """Test unreadable and absent names end up in two aggregated events."""
        populated_store.get_errors[("origin", "b")] = SecretStoreError(
            "403 Forbidden (origin/b)", namespace="origin", name="b", status=403
        )

        report = SecretCopier(populated_store).run(_by_name("a", "b", "x"))

        kinds = [e.kind for e in report.events]
        assert kinds.count(EventKind.SKIPPED_NOT_FOUND) == 1
        assert kinds.count(EventKind.SKIPPED_LOOKUP_FAILED) == 1
        lookup_event = next(e for e in report.events if e.kind is EventKind.SKIPPED_LOOKUP_FAILED)
        assert lookup_event.names == ("b",)
        assert "403" in lookup_event.reason
        assert report.copied == ["a"]


class TestCopierPlacementFailures:
    """Tests for partial failure tolerance."""

    def test_existing_destination_secrets_do_not_stop_the_batch(self, populated_store, secret_factory):
        """Test K existing secrets give K failures and N-K creations."""
        populated_store.add(secret_factory("a", namespace="ns2"))
        populated_store.add(secret_factory("c", namespace="ns2"))

        report = SecretCopier(populated_store).run(_all())

        assert report.copied == ["b"]
        assert [o.name for o in report.failed] == ["a", "c"]
        failure_events = [e for e in report.events if e.kind is EventKind.PLACEMENT_FAILED]
        assert [e.names for e in failure_events] == [("a",), ("c",)]
        assert all(e.namespace == "ns2" for e in failure_events)

    def test_every_secret_is_attempted_once(self, populated_store, secret_factory):
        """Test no retries happen after a failure."""
        populated_store.add(secret_factory("a", namespace="ns2"))

        SecretCopier(populated_store).run(_all())

        creates = [c for c in populated_store.calls if c[0] == "create"]
        assert creates == [("create", "ns2", "a"), ("create", "ns2", "b"), ("create", "ns2", "c")]


    def test_dropped_connection_does_not_stop_the_batch(self, secret_factory):
        """Test a transport error on one create leaves the others to be attempted."""
        api = MagicMock()
        api.list_namespaced_secret.return_value.items = [secret_factory(name) for name in ["a", "b", "c"]]
        api.create_namespaced_secret.side_effect = [
            None,
            ProtocolError("Connection aborted.", RemoteDisconnected("Remote end closed connection without response")),
            None,
        ]
        copier = SecretCopier(KubernetesSecretStore(api))

        report = copier.run(_all())

        assert report.copied == ["a", "c"]
        assert [o.name for o in report.failed] == ["b"]
        assert "Connection aborted" in report.failed[0].reason
        assert api.create_namespaced_secret.call_count == 3
        assert copier.state is CopyState.DONE


class TestCopierAllSecrets:
    """Tests for copying every secret of a namespace."""

    def test_copies_everything(self, populated_store):
        """Test all listed secrets are copied in listing order."""
        report = SecretCopier(populated_store).run(_all())

        assert report.copied == ["a", "b", "c"]
        assert populated_store.names_in("ns2") == ["a", "b", "c"]

    def test_empty_origin(self, store):
        """Test an empty origin completes with no placements."""
        copier = SecretCopier(store)

        report = copier.run(_all())

        assert report.outcomes == []
        assert [e.kind for e in report.events] == [EventKind.RESOLVING]
        assert not any(c[0] == "create" for c in store.calls)
        assert copier.state is CopyState.DONE

    def test_enumeration_failure_aborts(self, populated_store):
        """Test a failed listing raises and leaves the destination untouched."""
        populated_store.list_errors["origin"] = SecretStoreError("500 Internal (origin)", namespace="origin", status=500)
        copier = SecretCopier(populated_store)

        with pytest.raises(SourceEnumerationError):
            copier.run(_all())

        assert copier.state is CopyState.FAILED
        assert populated_store.names_in("ns2") == []
        assert not any(c[0] == "create" for c in populated_store.calls)


class TestCopierEvents:
    """Tests for the event stream ordering."""

    def test_event_order(self, populated_store, secret_factory):
        """Test resolving, skipped, found, then placing/result per secret."""
        populated_store.add(secret_factory("c", namespace="ns2"))

        report = SecretCopier(populated_store).run(_by_name("a", "x", "c"))

        assert [(e.kind, e.names) for e in report.events] == [
            (EventKind.RESOLVING, ("a", "x", "c")),
            (EventKind.SKIPPED_NOT_FOUND, ("x",)),
            (EventKind.FOUND, ("a",)),
            (EventKind.FOUND, ("c",)),
            (EventKind.PLACING, ("a",)),
            (EventKind.COPIED, ("a",)),
            (EventKind.PLACING, ("c",)),
            (EventKind.PLACEMENT_FAILED, ("c",)),
        ]

    def test_resolving_all_has_no_names(self, store):
        """Test the all-secrets resolve event names only the namespace."""
        report = SecretCopier(store).run(_all())

        assert report.events[0].names == ()
        assert report.events[0].namespace == "origin"

    def test_initial_state(self, store):
        """Test a fresh copier is idle."""
        assert SecretCopier(store).state is CopyState.IDLE

    def test_events_are_emitted_as_they_happen(self, populated_store):
        """Test the callback sees each event before the next store call."""
        seen = []

        def record(event):
            seen.append((event.kind, event.names, len(populated_store.calls)))

        report = SecretCopier(populated_store, on_event=record).run(_by_name("a", "b"))

        assert [(kind, names) for kind, names, _ in seen] == [(e.kind, e.names) for e in report.events]
        placing_a = next(calls for kind, names, calls in seen if kind is EventKind.PLACING and names == ("a",))
        copied_a = next(calls for kind, names, calls in seen if kind is EventKind.COPIED and names == ("a",))
        # two gets before placing a, exactly one create before a is reported copied
        assert placing_a == 2
        assert copied_a == 3

    def test_events_before_enumeration_failure_are_emitted(self, store):
        """Test the resolving event reaches the callback even when listing fails."""
        store.list_errors["origin"] = SecretStoreError("403 Forbidden (origin)", namespace="origin", status=403)
        seen = []

        with pytest.raises(SourceEnumerationError):
            SecretCopier(store, on_event=seen.append).run(_all())

        assert [e.kind for e in seen] == [EventKind.RESOLVING]
