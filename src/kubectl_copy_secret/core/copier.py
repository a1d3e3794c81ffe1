"""SecretCopier orchestrator.

This module provides the SecretCopier class which drives one copy run:
source every selected secret first, then transform and place each one
independently, collecting outcomes and diagnostic events on the way.
"""

from collections.abc import Callable

from icecream import ic

from kubectl_copy_secret.exceptions import SourceEnumerationError
from kubectl_copy_secret.models import (
    AllSecrets,
    ByName,
    CopyEvent,
    CopyReport,
    CopyRequest,
    CopyState,
    EventKind,
    OutcomeStatus,
    SourcingResult,
)
from kubectl_copy_secret.secrets.placement import place_secret
from kubectl_copy_secret.secrets.sourcing import source_secrets
from kubectl_copy_secret.secrets.transform import prepare_for_destination
from kubectl_copy_secret.store import SecretStore


class SecretCopier:
    """Copies secrets from one namespace to another.

    Calls are made sequentially and each store call is attempted once.
    A placement failure never stops the remaining placements; only a failed
    listing in all-secrets mode aborts the run.

    Attributes:
        store: The secret store used for both namespaces.
        on_event: Called with every event as soon as it is recorded.
        state: Where the most recent run got to.

    """

    def __init__(self, store: SecretStore, on_event: Callable[[CopyEvent], None] | None = None) -> None:
        self.store: SecretStore = store
        self.on_event: Callable[[CopyEvent], None] | None = on_event
        self.state: CopyState = CopyState.IDLE

    def run(self, request: CopyRequest) -> CopyReport:
        """Run a copy request.

        Args:
            request: What to copy, from where, to where.

        Returns:
            The CopyReport with one outcome per handled secret and the
            ordered diagnostic events.

        Raises:
            SourceEnumerationError: If the origin namespace could not be
                listed. Nothing is placed in that case.

        """
        report = CopyReport(request=request)
        self.state = CopyState.SOURCING
        self._emit(report, self._resolving_event(request))

        try:
            sourced = source_secrets(self.store, request.origin, request.selector)
        except SourceEnumerationError:
            self.state = CopyState.FAILED
            raise

        self._record_sourcing(report, sourced)

        self.state = CopyState.PLACING
        destination = request.destination
        for secret in sourced.secrets:
            name = secret.metadata.name
            self._emit(report, CopyEvent(kind=EventKind.PLACING, names=(name,), namespace=destination))
            outcome = place_secret(self.store, prepare_for_destination(secret, destination), destination)
            report.outcomes.append(outcome)
            if outcome.status is OutcomeStatus.COPIED:
                self._emit(report, CopyEvent(kind=EventKind.COPIED, names=(name,), namespace=destination))
            else:
                self._emit(
                    report,
                    CopyEvent(
                        kind=EventKind.PLACEMENT_FAILED,
                        names=(name,),
                        namespace=destination,
                        reason=outcome.reason,
                    ),
                )

        self.state = CopyState.DONE
        ic(report.copied, report.failed)
        return report

    def _emit(self, report: CopyReport, event: CopyEvent) -> None:
        report.events.append(event)
        if self.on_event is not None:
            self.on_event(event)

    @staticmethod
    def _resolving_event(request: CopyRequest) -> CopyEvent:
        match request.selector:
            case ByName(names=names):
                return CopyEvent(kind=EventKind.RESOLVING, names=names, namespace=request.origin)
            case AllSecrets():
                return CopyEvent(kind=EventKind.RESOLVING, names=(), namespace=request.origin)
        raise TypeError(f"Unsupported selector: {request.selector!r}")

    def _record_sourcing(self, report: CopyReport, sourced: SourcingResult) -> None:
        origin = report.request.origin
        report.sourced.extend(sourced.found_names)
        report.outcomes.extend(sourced.skipped)

        # One aggregated event per skip category, never one per name.
        if sourced.not_found:
            self._emit(
                report, CopyEvent(kind=EventKind.SKIPPED_NOT_FOUND, names=tuple(sourced.not_found), namespace=origin)
            )
        if sourced.lookup_failed:
            reasons = "; ".join(o.reason or "" for o in sourced.skipped if o.status is OutcomeStatus.LOOKUP_FAILED)
            self._emit(
                report,
                CopyEvent(
                    kind=EventKind.SKIPPED_LOOKUP_FAILED,
                    names=tuple(sourced.lookup_failed),
                    namespace=origin,
                    reason=reasons,
                ),
            )
        for name in sourced.found_names:
            self._emit(report, CopyEvent(kind=EventKind.FOUND, names=(name,), namespace=origin))
