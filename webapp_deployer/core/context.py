"""
Deployment context and configuration classes.

All state needed by a run is held in explicit objects that are passed to
the orchestrator steps instead of living in module-level globals.

    - SampleConfig: settings loaded from the optional config file / CLI
    - RunNames: the randomized resource names for a single run
    - DeploymentContext: config + names + the run's mutable state
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import webapp_deployer.constants as CONSTANTS


@dataclass
class SampleConfig:
    """
    Settings for a deployment run.

    Attributes:
        region: Azure region for every resource
        project_path: Root directory that contains the asset directory
        asset_dir: Asset directory name, relative to project_path
        upload_files: Files (relative to the asset directory) uploaded as blobs
        deploy_archive: Archive (relative to the asset directory) deployed over FTP
        storage_sku: Storage account SKU name
        storage_kind: Storage account kind
        app_port: Value of the PORT app setting
        app_service_plan_id: Optional existing plan; omitted from the site when None
        warmup_delay_seconds: Delay between the two warm-up probes
        http_timeout_seconds: Upper bound for each warm-up request
        pause_before_cleanup: Wait for the user before deleting the resource group
        is_running_mocked: Skip real HTTP traffic in the warm-up helpers
        mode: "DEBUG" enables debug logging
    """

    region: str = CONSTANTS.DEFAULT_REGION
    project_path: Path = CONSTANTS.DEFAULT_PROJECT_PATH
    asset_dir: str = CONSTANTS.DEFAULT_ASSET_DIR_NAME
    upload_files: List[str] = field(default_factory=lambda: list(CONSTANTS.DEFAULT_UPLOAD_FILES))
    deploy_archive: str = CONSTANTS.DEFAULT_DEPLOY_ARCHIVE
    storage_sku: str = CONSTANTS.DEFAULT_STORAGE_SKU
    storage_kind: str = CONSTANTS.DEFAULT_STORAGE_KIND
    app_port: str = CONSTANTS.DEFAULT_APP_PORT
    app_service_plan_id: Optional[str] = None
    warmup_delay_seconds: float = CONSTANTS.DEFAULT_WARMUP_DELAY_SECONDS
    http_timeout_seconds: float = CONSTANTS.DEFAULT_HTTP_TIMEOUT_SECONDS
    pause_before_cleanup: bool = False
    is_running_mocked: bool = False
    mode: str = "INFO"

    @property
    def asset_path(self) -> Path:
        return Path(self.project_path) / self.asset_dir

    def upload_file_paths(self) -> List[Path]:
        """Absolute-ish paths of every file to upload as a blob."""
        return [self.asset_path / name for name in self.upload_files]

    def deploy_archive_path(self) -> Path:
        return self.asset_path / self.deploy_archive

    @property
    def debug_mode(self) -> bool:
        return self.mode.upper() == "DEBUG"


@dataclass
class RunNames:
    """Randomized resource names for one run. Never reused across runs."""

    web_app: str
    storage_account: str
    container: str
    resource_group: str

    @property
    def web_app_host(self) -> str:
        return self.web_app + CONSTANTS.WEB_APP_HOST_SUFFIX


@dataclass
class DeploymentContext:
    """
    Encapsulates all state of a single deployment run.

    Lifecycle:
        1. Created by the entry point with config and freshly generated names
        2. Steps fill in resource_group, connection_string, web_app, ...
        3. Cleanup reads resource_group to decide whether anything must be deleted

    Attributes:
        config: Run settings
        names: Randomized resource names
        resource_group: Name of the created resource group, None until created
        storage_account: Created storage account object
        connection_string: Storage connection string (memory only)
        uploaded_blobs: Blob names uploaded to the container
        web_app: Created web app object
        step_results: StepResult for every step that ran
    """

    config: SampleConfig
    names: RunNames
    resource_group: Optional[str] = None
    storage_account: Any = None
    connection_string: Optional[str] = None
    uploaded_blobs: List[str] = field(default_factory=list)
    web_app: Any = None
    step_results: List[Any] = field(default_factory=list)

    @property
    def web_app_url(self) -> str:
        return f"http://{self.names.web_app_host}"
