"""
Unit tests for the step-based orchestrator.

Tests cover:
- Step ordering and StepResult bookkeeping
- Short-circuit on the first failing step
- Cleanup exactly once on every exit path (success, failure, cancellation)
- Cleanup failures never escaping run()
- Pause hook before cleanup
"""

import pytest
from unittest.mock import MagicMock

from webapp_deployer.core.context import DeploymentContext
from webapp_deployer.core.exceptions import DeploymentError, ResourceCreationError
from webapp_deployer.core.interaction import NonInteractive
from webapp_deployer.core.orchestrator import (
    Orchestrator,
    Step,
    StepResult,
    cleanup_scope,
    run_step,
)


def _recording_steps(calls, fail_at=None, count=4):
    """Build count steps appending their name to calls; step fail_at raises."""
    steps = []
    for index in range(count):
        name = f"step{index}"

        def action(context, name=name, index=index):
            calls.append(name)
            if index == fail_at:
                raise RuntimeError(f"{name} exploded")
            return index

        steps.append(Step(name, action))
    return steps


class TestRunStep:

    def test_value_is_captured(self, deployment_context):
        result = run_step(Step("double", lambda ctx: 21 * 2), deployment_context)

        assert result == StepResult("double", value=42)
        assert result.ok is True

    def test_exception_is_captured(self, deployment_context):
        error = ValueError("bad")

        def action(ctx):
            raise error

        result = run_step(Step("broken", action), deployment_context)

        assert result.ok is False
        assert result.error is error
        assert result.value is None


class TestOrchestrator:

    def test_all_steps_run_in_order(self, deployment_context, captured_logger):
        calls = []
        cleanup = MagicMock()
        orchestrator = Orchestrator(_recording_steps(calls), cleanup, logger=captured_logger)

        assert orchestrator.run(deployment_context) is True

        assert calls == ["step0", "step1", "step2", "step3"]
        assert [r.value for r in deployment_context.step_results] == [0, 1, 2, 3]
        cleanup.assert_called_once_with(deployment_context)

    @pytest.mark.parametrize("fail_at", [0, 1, 2, 3])
    def test_failure_short_circuits_and_cleans_up_once(self, fail_at, deployment_context, captured_logger):
        calls = []
        cleanup = MagicMock()
        orchestrator = Orchestrator(_recording_steps(calls, fail_at=fail_at), cleanup, logger=captured_logger)

        assert orchestrator.run(deployment_context) is False

        assert calls == [f"step{i}" for i in range(fail_at + 1)]
        assert deployment_context.step_results[-1].ok is False
        cleanup.assert_called_once_with(deployment_context)
        assert any(f"Step 'step{fail_at}' failed" in m for m in captured_logger.messages)

    def test_cleanup_error_is_logged_not_raised(self, deployment_context, captured_logger):
        cleanup = MagicMock(side_effect=RuntimeError("delete failed"))
        orchestrator = Orchestrator(_recording_steps([]), cleanup, logger=captured_logger)

        assert orchestrator.run(deployment_context) is True

        assert any("Cleanup failed: RuntimeError: delete failed" in m for m in captured_logger.messages)

    def test_cleanup_error_does_not_mask_step_error(self, deployment_context, captured_logger):
        cleanup = MagicMock(side_effect=RuntimeError("delete failed"))
        orchestrator = Orchestrator(_recording_steps([], fail_at=1), cleanup, logger=captured_logger)

        assert orchestrator.run(deployment_context) is False

        assert isinstance(deployment_context.step_results[-1].error, RuntimeError)
        assert "step1 exploded" in str(deployment_context.step_results[-1].error)

    def test_cancellation_still_cleans_up(self, deployment_context, captured_logger):
        cleanup = MagicMock()

        def interrupted(ctx):
            raise KeyboardInterrupt

        orchestrator = Orchestrator([Step("interrupted", interrupted)], cleanup, logger=captured_logger)

        with pytest.raises(KeyboardInterrupt):
            orchestrator.run(deployment_context)

        cleanup.assert_called_once_with(deployment_context)

    def test_pause_before_cleanup_when_configured(self, deployment_context, captured_logger):
        deployment_context.config.pause_before_cleanup = True
        deployment_context.resource_group = "rg1NEMV_7"
        interaction = NonInteractive()
        orchestrator = Orchestrator([], MagicMock(), logger=captured_logger, interaction=interaction)

        orchestrator.run(deployment_context)

        assert interaction.prompts == ["Press ENTER to delete resource group rg1NEMV_7..."]

    def test_no_pause_without_resource_group(self, deployment_context, captured_logger):
        deployment_context.config.pause_before_cleanup = True
        interaction = NonInteractive()
        orchestrator = Orchestrator([], MagicMock(), logger=captured_logger, interaction=interaction)

        orchestrator.run(deployment_context)

        assert interaction.prompts == []

    def test_interrupt_at_pause_prompt_still_cleans_up(self, deployment_context, captured_logger):
        deployment_context.config.pause_before_cleanup = True
        deployment_context.resource_group = "rg1NEMV_7"
        interaction = MagicMock()
        interaction.pause.side_effect = KeyboardInterrupt
        cleanup = MagicMock()
        orchestrator = Orchestrator([], cleanup, logger=captured_logger, interaction=interaction)

        with pytest.raises(KeyboardInterrupt):
            orchestrator.run(deployment_context)

        cleanup.assert_called_once_with(deployment_context)

    def test_pause_error_still_cleans_up(self, deployment_context, captured_logger):
        deployment_context.config.pause_before_cleanup = True
        deployment_context.resource_group = "rg1NEMV_7"
        interaction = MagicMock()
        interaction.pause.side_effect = OSError("stdin closed")
        cleanup = MagicMock()
        orchestrator = Orchestrator([], cleanup, logger=captured_logger, interaction=interaction)

        assert orchestrator.run(deployment_context) is True

        cleanup.assert_called_once_with(deployment_context)
        assert "Cleanup failed: OSError: stdin closed" in captured_logger.messages

    def test_deployment_error_records_failing_step(self, deployment_context, captured_logger):
        error = ResourceCreationError("storage account key", "jsdkstore13", reason="no access keys returned")

        def action(ctx):
            raise error

        orchestrator = Orchestrator([Step("create_storage_account", action)], MagicMock(), logger=captured_logger)

        assert orchestrator.run(deployment_context) is False

        assert error.step == "create_storage_account"
        assert str(error).endswith("[step=create_storage_account]")

    def test_existing_step_on_error_is_kept(self, deployment_context, captured_logger):
        error = DeploymentError("boom", step="inner")

        def action(ctx):
            raise error

        Orchestrator([Step("outer", action)], MagicMock(), logger=captured_logger).run(deployment_context)

        assert error.step == "inner"


class TestCleanupScope:

    def test_release_runs_on_normal_exit(self, deployment_context, captured_logger):
        release = MagicMock()

        with cleanup_scope(deployment_context, release, captured_logger) as ctx:
            assert ctx is deployment_context

        release.assert_called_once_with(deployment_context)

    def test_original_error_propagates_over_release_error(self, deployment_context, captured_logger):
        release = MagicMock(side_effect=RuntimeError("release failed"))

        with pytest.raises(ValueError, match="original"):
            with cleanup_scope(deployment_context, release, captured_logger):
                raise ValueError("original")

        release.assert_called_once()
        assert any("release failed" in m for m in captured_logger.messages)
