"""Data models for the installation orchestrator."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Union


class DetectResult(Enum):
    PRESENT = "present"
    ABSENT = "absent"


@dataclass(frozen=True)
class InstallResult:
    success: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> "InstallResult":
        return cls(success=True)

    @classmethod
    def failure(cls, reason: str) -> "InstallResult":
        return cls(success=False, reason=reason)


Detector = Callable[[], Union[DetectResult, bool, Awaitable[Any]]]
Installer = Callable[[], Union[InstallResult, bool, None, Awaitable[Any]]]


@dataclass(frozen=True)
class InstallableItem:
    """One provisionable unit: a detect/install pair plus metadata.

    ``detect`` and ``install`` take no arguments and may be plain functions
    or coroutine functions. ``depends_on`` names items that must be declared
    (and evaluated) earlier in the same run.
    """

    name: str
    detect: Detector
    install: Installer
    requires_confirmation: bool = True
    depends_on: tuple[str, ...] = ()
    description: str = ""


class OutcomeKind(Enum):
    ALREADY_PRESENT = "already_present"
    INSTALLED = "installed"
    UPDATED = "updated"
    SKIPPED_BY_USER = "skipped_by_user"
    SKIPPED_NO_CONSENT = "skipped_no_consent"
    FAILED = "failed"

    @property
    def satisfied(self) -> bool:
        """Whether dependents of an item with this outcome may proceed."""
        return self in (
            OutcomeKind.ALREADY_PRESENT,
            OutcomeKind.INSTALLED,
            OutcomeKind.UPDATED,
        )


@dataclass(frozen=True)
class ItemOutcome:
    name: str
    kind: OutcomeKind
    reason: str | None = None


@dataclass(frozen=True)
class RunMode:
    auto_approve: bool = False
    force_reinstall: bool = False


@dataclass(frozen=True)
class RunReport:
    """Ordered outcome ledger for one orchestration pass, in evaluation order."""

    outcomes: tuple[ItemOutcome, ...] = ()

    def outcome_for(self, name: str) -> ItemOutcome | None:
        for outcome in self.outcomes:
            if outcome.name == name:
                return outcome
        return None

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)

    @property
    def has_failures(self) -> bool:
        return any(o.kind == OutcomeKind.FAILED for o in self.outcomes)

    @property
    def changed(self) -> bool:
        return any(
            o.kind in (OutcomeKind.INSTALLED, OutcomeKind.UPDATED)
            for o in self.outcomes
        )


@dataclass(frozen=True)
class RunSummary:
    present: tuple[ItemOutcome, ...] = ()
    installed: tuple[ItemOutcome, ...] = ()
    updated: tuple[ItemOutcome, ...] = ()
    skipped: tuple[ItemOutcome, ...] = ()
    failed: tuple[ItemOutcome, ...] = ()

    @property
    def total(self) -> int:
        return (
            len(self.present)
            + len(self.installed)
            + len(self.updated)
            + len(self.skipped)
            + len(self.failed)
        )


__all__ = [
    "DetectResult",
    "InstallResult",
    "Detector",
    "Installer",
    "InstallableItem",
    "OutcomeKind",
    "ItemOutcome",
    "RunMode",
    "RunReport",
    "RunSummary",
]
