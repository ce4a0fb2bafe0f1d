"""Installation orchestrator: items, consent, execution and reporting."""

from .actions import (
    AutostartEntry,
    RiskLevel,
    autostart_installer,
    infer_risk_level,
    shell_installer,
)
from .consent import (
    AutoApprove,
    ConsentProvider,
    ScriptedConsent,
    TerminalConsent,
    parse_answer,
)
from .detection import (
    check_command,
    command_exists,
    package_installed,
    path_exists,
    with_min_version,
)
from .engine import VERIFICATION_FAILED, Orchestrator, run, validate_items
from .models import (
    DetectResult,
    InstallableItem,
    InstallResult,
    ItemOutcome,
    OutcomeKind,
    RunMode,
    RunReport,
    RunSummary,
)
from .reporting import ConsoleReporter, Reporter, render_summary, summarize

__all__ = [
    "DetectResult",
    "InstallResult",
    "InstallableItem",
    "OutcomeKind",
    "ItemOutcome",
    "RunMode",
    "RunReport",
    "RunSummary",
    "RiskLevel",
    "infer_risk_level",
    "shell_installer",
    "AutostartEntry",
    "autostart_installer",
    "ConsentProvider",
    "parse_answer",
    "AutoApprove",
    "TerminalConsent",
    "ScriptedConsent",
    "check_command",
    "command_exists",
    "package_installed",
    "path_exists",
    "with_min_version",
    "VERIFICATION_FAILED",
    "validate_items",
    "Orchestrator",
    "run",
    "Reporter",
    "ConsoleReporter",
    "summarize",
    "render_summary",
]
