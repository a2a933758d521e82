"""
Step-based provisioning orchestrator.

A run is an explicit ordered list of named steps. Each step is executed in
turn and produces a StepResult holding either its value or the error it
raised. The first failed step short-circuits the run. A cleanup action is
bound to the run through cleanup_scope() and is executed exactly once on
every exit path (success, step failure or cancellation such as Ctrl+C).

State machine:
    Init -> step 1 -> step 2 -> ... -> step N -> CleanedUp
      any failing step ------------------------^

Usage:
    orchestrator = Orchestrator(steps, cleanup=workflow.cleanup, logger=log)
    ok = orchestrator.run(context)
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional

from .context import DeploymentContext
from .exceptions import DeploymentError
from .interaction import Interaction, NonInteractive

StepAction = Callable[[DeploymentContext], Any]
CleanupAction = Callable[[DeploymentContext], None]


@dataclass
class Step:
    """A named unit of work operating on the deployment context."""

    name: str
    action: StepAction


@dataclass
class StepResult:
    """Outcome of a single step: either a value or the raised error."""

    name: str
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_step(step: Step, context: DeploymentContext) -> StepResult:
    """Execute one step, converting any raised Exception into a failed StepResult."""
    try:
        return StepResult(step.name, value=step.action(context))
    except Exception as e:
        return StepResult(step.name, error=e)


@contextmanager
def cleanup_scope(
    context: DeploymentContext,
    release: CleanupAction,
    logger: logging.Logger
) -> Iterator[DeploymentContext]:
    """
    Guarantee that release(context) runs when the block exits.

    Errors raised by release are logged and swallowed so they can never
    replace the error (or cancellation) that ended the block.
    """
    try:
        yield context
    finally:
        try:
            release(context)
        except Exception as e:
            logger.error(f"Cleanup failed: {type(e).__name__}: {e}")


class Orchestrator:
    """
    Runs steps in order with guaranteed cleanup.

    Attributes:
        steps: Ordered steps to execute
        cleanup: Action releasing everything the steps acquired
        logger: Destination of all progress and error messages
        interaction: Hook used to pause before cleanup when configured
    """

    def __init__(
        self,
        steps: List[Step],
        cleanup: CleanupAction,
        logger: Optional[logging.Logger] = None,
        interaction: Optional[Interaction] = None
    ):
        self.steps = list(steps)
        self.cleanup = cleanup
        self.logger = logger or logging.getLogger(__name__)
        self.interaction = interaction or NonInteractive()

    def run(self, context: DeploymentContext) -> bool:
        """
        Execute all steps, then clean up.

        Returns:
            True if every step succeeded, False otherwise. Never raises
            Exception; cancellation still triggers cleanup and propagates.
        """
        with cleanup_scope(context, self._release, self.logger):
            for step in self.steps:
                self.logger.debug(f"Running step: {step.name}")
                result = run_step(step, context)
                context.step_results.append(result)
                if not result.ok:
                    error = result.error
                    self.logger.error(f"Step '{step.name}' failed: {type(error).__name__}: {error}")
                    self.logger.debug("Step failure details", exc_info=error)
                    if isinstance(error, DeploymentError) and error.step is None:
                        error.step = step.name
                    return False
            self.logger.info(f"✓ All {len(self.steps)} steps completed")
            return True

    def _release(self, context: DeploymentContext) -> None:
        try:
            if context.config.pause_before_cleanup and context.resource_group is not None:
                self.interaction.pause(
                    f"Press ENTER to delete resource group {context.resource_group}..."
                )
        finally:
            self.cleanup(context)
