"""Consent providers: per-item yes/no decisions supplied from outside."""

from typing import Iterable, Protocol

import click

from provisio.errors import ConsentInputError

_YES = {"y", "yes"}
_NO = {"n", "no"}


class ConsentProvider(Protocol):
    def __call__(self, prompt: str) -> bool: ...


def parse_answer(answer: str) -> bool:
    """Map a raw answer to a decision; raise ConsentInputError if unrecognized."""
    normalized = answer.strip().lower()
    if normalized in _YES:
        return True
    if normalized in _NO:
        return False
    raise ConsentInputError(answer)


class AutoApprove:
    def __call__(self, prompt: str) -> bool:
        return True


class TerminalConsent:
    """Read one answer from the terminal per call.

    Invalid answers raise ConsentInputError; the orchestrator re-asks.
    """

    def __call__(self, prompt: str) -> bool:
        answer = click.prompt(
            f"  > {prompt} (y/n)", default="", show_default=False, prompt_suffix=" "
        )
        return parse_answer(answer)


class ScriptedConsent:
    """Replay canned answers in order; records every prompt it was shown."""

    def __init__(self, answers: Iterable[str]):
        self._answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if not self._answers:
            raise AssertionError(f"No scripted answer left for prompt: {prompt}")
        return parse_answer(self._answers.pop(0))


__all__ = [
    "ConsentProvider",
    "parse_answer",
    "AutoApprove",
    "TerminalConsent",
    "ScriptedConsent",
]
