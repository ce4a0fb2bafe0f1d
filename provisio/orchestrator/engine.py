"""Sequential, fault-tolerant installation orchestrator."""

import inspect
import logging
from typing import Any, Sequence

from provisio.errors import ConsentInputError, ItemFailure, PreconditionError

from .consent import AutoApprove, ConsentProvider, TerminalConsent
from .models import (
    DetectResult,
    InstallableItem,
    InstallResult,
    ItemOutcome,
    OutcomeKind,
    RunMode,
    RunReport,
)
from .reporting import Reporter

_logging = logging.getLogger(__name__)

VERIFICATION_FAILED = "post-install verification failed"


def validate_items(items: Sequence[InstallableItem]) -> None:
    """Check run preconditions; raise PreconditionError on the first violation."""
    if not items:
        raise PreconditionError("No items to install")

    seen: set[str] = set()
    for item in items:
        if not item.name:
            raise PreconditionError("Item name must be a non-empty string")
        if item.name in seen:
            raise PreconditionError(f"Duplicate item name: {item.name}")
        if not callable(item.detect):
            raise PreconditionError(f"Item '{item.name}' detect is not callable")
        if not callable(item.install):
            raise PreconditionError(f"Item '{item.name}' install is not callable")
        for dep in item.depends_on:
            if dep not in seen:
                raise PreconditionError(
                    f"Item '{item.name}' depends on '{dep}', "
                    "which must be declared before it"
                )
        seen.add(item.name)


async def _call(capability) -> Any:
    result = capability()
    if inspect.isawaitable(result):
        result = await result
    return result


async def _detect(item: InstallableItem) -> bool:
    result = await _call(item.detect)
    if isinstance(result, DetectResult):
        return result == DetectResult.PRESENT
    return bool(result)


def _failure_reason(result: Any) -> str | None:
    """Return why an install result counts as failure, or None on success.

    Installers may return an InstallResult, a bool, or None (success;
    such installers signal failure by raising).
    """
    if isinstance(result, InstallResult):
        if result.success:
            return None
        return result.reason or "install action reported failure"
    if result is None or result is True:
        return None
    if result is False:
        return "install action reported failure"
    return f"unexpected install result: {result!r}"


def _error_reason(error: Exception) -> str:
    message = str(error)
    if isinstance(error, ItemFailure) and message:
        return message
    if message:
        return f"{type(error).__name__}: {message}"
    return type(error).__name__


class Orchestrator:
    """Evaluates items one at a time, in declaration order.

    Individual failures never abort a run; they are recorded as FAILED and
    the next item is evaluated. Only PreconditionError escapes ``run``.
    """

    def __init__(
        self,
        mode: RunMode,
        consent: ConsentProvider | None = None,
        reporter: Reporter | None = None,
    ):
        self.mode = mode
        if consent is None:
            consent = AutoApprove() if mode.auto_approve else TerminalConsent()
        self.consent = consent
        self.reporter = reporter or Reporter()

    async def run(self, items: Sequence[InstallableItem]) -> RunReport:
        validate_items(items)

        required_by: dict[str, list[str]] = {}
        for item in items:
            for dep in item.depends_on:
                required_by.setdefault(dep, []).append(item.name)

        outcomes: list[ItemOutcome] = []
        by_name: dict[str, ItemOutcome] = {}
        total = len(items)

        for index, item in enumerate(items, 1):
            self.reporter.item_started(item, index, total)
            outcome = await self._evaluate(item, by_name, required_by.get(item.name, []))
            _logging.debug(f"{item.name}: {outcome.kind.value} {outcome.reason or ''}")
            outcomes.append(outcome)
            by_name[item.name] = outcome
            self.reporter.item_finished(item, outcome)

        return RunReport(outcomes=tuple(outcomes))

    async def _evaluate(
        self,
        item: InstallableItem,
        by_name: dict[str, ItemOutcome],
        dependents: list[str],
    ) -> ItemOutcome:
        for dep in item.depends_on:
            if not by_name[dep].kind.satisfied:
                return ItemOutcome(
                    item.name, OutcomeKind.SKIPPED_NO_CONSENT, f"{dep} not available"
                )

        try:
            present = await _detect(item)
        except Exception as e:
            _logging.debug(f"Detection failed for {item.name}: {e}")
            return ItemOutcome(
                item.name, OutcomeKind.FAILED, f"detection failed: {_error_reason(e)}"
            )
        self.reporter.item_detected(item, present)

        if present and not self.mode.force_reinstall:
            return ItemOutcome(item.name, OutcomeKind.ALREADY_PRESENT)

        if not self._consent(item, present, dependents):
            if dependents:
                return ItemOutcome(
                    item.name,
                    OutcomeKind.SKIPPED_NO_CONSENT,
                    f"declined; required by {', '.join(dependents)}",
                )
            return ItemOutcome(item.name, OutcomeKind.SKIPPED_BY_USER)

        try:
            result = await _call(item.install)
        except Exception as e:
            _logging.debug(f"Install action raised for {item.name}: {e}")
            return ItemOutcome(item.name, OutcomeKind.FAILED, _error_reason(e))

        reason = _failure_reason(result)
        if reason:
            return ItemOutcome(item.name, OutcomeKind.FAILED, reason)

        try:
            verified = await _detect(item)
        except Exception as e:
            _logging.debug(f"Verification raised for {item.name}: {e}")
            verified = False
        if not verified:
            return ItemOutcome(item.name, OutcomeKind.FAILED, VERIFICATION_FAILED)

        return ItemOutcome(
            item.name, OutcomeKind.UPDATED if present else OutcomeKind.INSTALLED
        )

    def _consent(self, item: InstallableItem, present: bool, dependents: list[str]) -> bool:
        if self.mode.auto_approve or not item.requires_confirmation:
            return True

        verb = "Reinstall" if present else "Install"
        prompt = f"{verb} {item.name}?"
        if dependents:
            prompt = f"{verb} {item.name} (required by {', '.join(dependents)})?"

        while True:
            try:
                return self.consent(prompt)
            except ConsentInputError as e:
                self.reporter.consent_invalid(item, e.answer)


async def run(
    items: Sequence[InstallableItem],
    mode: RunMode,
    consent: ConsentProvider | None = None,
    reporter: Reporter | None = None,
) -> RunReport:
    return await Orchestrator(mode, consent=consent, reporter=reporter).run(items)


__all__ = [
    "VERIFICATION_FAILED",
    "validate_items",
    "Orchestrator",
    "run",
]
