"""
User interaction hooks.

The orchestrator never reads from stdin directly; it receives an
Interaction object so runs can be made fully non-interactive (and tests
deterministic).
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Interaction(Protocol):
    """Anything that can pause the run until the user is ready."""

    def pause(self, prompt: str) -> str:
        ...


class ConsoleInteraction:
    """Blocks on stdin."""

    def pause(self, prompt: str) -> str:
        try:
            return input(prompt)
        except EOFError:
            return ""


class NonInteractive:
    """Never blocks. Used by default and in tests."""

    def __init__(self):
        self.prompts = []

    def pause(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return ""
