"""Data models for kubectl-copy-secret.

This module provides type-safe data structures for a copy run: the request
and its selector, the per-secret outcomes, and the ordered event stream
that the command line renders.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

from kubernetes.client import V1Secret


@dataclass(frozen=True, slots=True)
class ByName:
    """Select secrets by an explicit, ordered list of names.

    Attributes:
        names: Secret names in the order given by the caller.

    """

    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError("ByName selector requires at least one secret name")


@dataclass(frozen=True, slots=True)
class AllSecrets:
    """Select every secret found in the origin namespace."""


Selector: TypeAlias = ByName | AllSecrets


@dataclass(frozen=True, slots=True)
class CopyRequest:
    """A single copy invocation.

    Attributes:
        origin: Namespace to copy secrets from.
        destination: Namespace to copy secrets to.
        selector: Which secrets of the origin to copy.

    """

    origin: str
    destination: str
    selector: Selector

    def __post_init__(self) -> None:
        if not self.origin:
            raise ValueError("Origin namespace cannot be empty")
        if not self.destination:
            raise ValueError("Destination namespace cannot be empty")
        if not isinstance(self.selector, (ByName, AllSecrets)):
            raise TypeError(f"Unsupported selector: {self.selector!r}")


class OutcomeStatus(str, Enum):
    """Result of handling a single secret.

    Inherits from str so the value can be printed directly.
    """

    COPIED = "copied"
    NOT_FOUND = "not-found"
    LOOKUP_FAILED = "lookup-failed"
    CREATE_FAILED = "create-failed"


@dataclass(frozen=True, slots=True)
class CopyOutcome:
    """Per-secret result of a copy run.

    Attributes:
        name: The secret name.
        namespace: The namespace the outcome refers to (origin for skips,
            destination for placements).
        status: What happened to the secret.
        reason: Error text for failed outcomes.

    """

    name: str
    namespace: str
    status: OutcomeStatus
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.COPIED


@dataclass(frozen=True, slots=True)
class SourcingResult:
    """Secrets resolved from the origin namespace.

    Attributes:
        secrets: Found secrets, in caller order (by name) or listing order (all).
        skipped: Outcomes for names that could not be sourced.

    """

    secrets: tuple[V1Secret, ...]
    skipped: tuple[CopyOutcome, ...] = ()

    @property
    def found_names(self) -> list[str]:
        return [secret.metadata.name for secret in self.secrets]

    @property
    def not_found(self) -> list[str]:
        return [o.name for o in self.skipped if o.status is OutcomeStatus.NOT_FOUND]

    @property
    def lookup_failed(self) -> list[str]:
        return [o.name for o in self.skipped if o.status is OutcomeStatus.LOOKUP_FAILED]


class EventKind(str, Enum):
    """Kinds of diagnostic events emitted during a copy run."""

    RESOLVING = "resolving"
    SKIPPED_NOT_FOUND = "skipped-not-found"
    SKIPPED_LOOKUP_FAILED = "skipped-lookup-failed"
    FOUND = "found"
    PLACING = "placing"
    COPIED = "copied"
    PLACEMENT_FAILED = "placement-failed"


@dataclass(frozen=True, slots=True)
class CopyEvent:
    """A structured diagnostic record.

    Attributes:
        kind: What the event reports.
        names: Secret names concerned; empty for an all-secrets resolve.
        namespace: Namespace the event refers to.
        reason: Error text, for failure events.

    """

    kind: EventKind
    names: tuple[str, ...]
    namespace: str
    reason: str | None = None


class CopyState(Enum):
    """Lifecycle of a copy run."""

    IDLE = "idle"
    SOURCING = "sourcing"
    PLACING = "placing"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class CopyReport:
    """Everything a finished copy run produced.

    Outcomes and events are append-only; one outcome is recorded per
    requested or listed secret.
    """

    request: CopyRequest
    sourced: list[str] = field(default_factory=list)
    outcomes: list[CopyOutcome] = field(default_factory=list)
    events: list[CopyEvent] = field(default_factory=list)

    @property
    def copied(self) -> list[str]:
        return [o.name for o in self.outcomes if o.status is OutcomeStatus.COPIED]

    @property
    def failed(self) -> list[CopyOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.CREATE_FAILED]

    @property
    def skipped(self) -> list[CopyOutcome]:
        return [o for o in self.outcomes if o.status in (OutcomeStatus.NOT_FOUND, OutcomeStatus.LOOKUP_FAILED)]
