"""
Core abstractions for the web app deployer.

Modules:
    context: SampleConfig, RunNames and DeploymentContext
    orchestrator: Step, StepResult, Orchestrator and cleanup_scope
    interaction: Pause hooks injected into the orchestrator
    config_loader: Configuration and credential loading
    exceptions: Custom exception types for deployment operations
"""

from .context import DeploymentContext, RunNames, SampleConfig
from .exceptions import (
    ConfigurationError,
    DeploymentError,
    PublishProfileError,
    ResourceCreationError,
    ResourceDeletionError,
)
from .interaction import ConsoleInteraction, Interaction, NonInteractive
from .orchestrator import Orchestrator, Step, StepResult, cleanup_scope, run_step

__all__ = [
    # Context
    "DeploymentContext",
    "RunNames",
    "SampleConfig",
    # Orchestration
    "Orchestrator",
    "Step",
    "StepResult",
    "cleanup_scope",
    "run_step",
    # Interaction
    "Interaction",
    "ConsoleInteraction",
    "NonInteractive",
    # Exceptions
    "DeploymentError",
    "ConfigurationError",
    "ResourceCreationError",
    "ResourceDeletionError",
    "PublishProfileError",
]
