"""
Azure Linux Web App + Storage Account workflow.

Defines the named steps executed by the Orchestrator and the cleanup bound
to the run:

    1. create_resource_group
    2. create_storage_account   (+ key retrieval + connection string)
    3. upload_blobs
    4. create_web_app
    5. deploy_archive           (publishing profile + FTP upload)
    6. warm_up                  (two advisory GETs, fixed delay between them)
    -> cleanup                  (delete the Resource Group, always)

Every progress line goes to the logger handed to the workflow.
"""

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from webapp_deployer.core.context import DeploymentContext, SampleConfig
from webapp_deployer.core.interaction import Interaction
from webapp_deployer.core.orchestrator import Orchestrator, Step
from webapp_deployer.providers.azure.layers import (
    deployment_helpers,
    layer_setup_azure,
    layer_storage,
    layer_web_app,
)
from webapp_deployer.providers.azure.naming import AzureNaming

if TYPE_CHECKING:
    from webapp_deployer.providers.azure.provider import AzureProvider


class LinuxWebAppWorkflow:
    """
    Steps and cleanup for one Azure provider.

    Attributes:
        provider: Azure Provider instance with initialized clients
        logger: Destination of all progress messages
    """

    def __init__(self, provider: 'AzureProvider', logger: Optional[logging.Logger] = None):
        self.provider = provider
        self.logger = logger or logging.getLogger(__name__)

    def steps(self) -> List[Step]:
        return [
            Step("create_resource_group", self.create_resource_group),
            Step("create_storage_account", self.create_storage_account),
            Step("upload_blobs", self.upload_blobs),
            Step("create_web_app", self.create_web_app),
            Step("deploy_archive", self.deploy_archive),
            Step("warm_up", self.warm_up),
        ]

    # ==========================================
    # Steps
    # ==========================================

    def create_resource_group(self, context: DeploymentContext):
        rg_name = context.names.resource_group
        self.logger.info(f"Creating Resource Group: {rg_name}...")
        resource_group = layer_setup_azure.create_resource_group(
            self.provider, rg_name, context.config.region
        )
        context.resource_group = rg_name
        self.logger.info(f"Created Resource Group: {rg_name}")
        return resource_group

    def create_storage_account(self, context: DeploymentContext):
        config = context.config
        storage_name = context.names.storage_account

        self.logger.info(f"Creating storage account {storage_name}...")

        account = layer_storage.create_storage_account(
            self.provider,
            context.resource_group,
            storage_name,
            config.region,
            sku=config.storage_sku,
            kind=config.storage_kind,
        )
        context.storage_account = account

        account_key = layer_storage.get_storage_account_key(
            self.provider, context.resource_group, storage_name
        )
        context.connection_string = layer_storage.build_connection_string(storage_name, account_key)

        self.logger.info(f"Created storage account {storage_name}")
        return account

    def upload_blobs(self, context: DeploymentContext):
        container_name = context.names.container
        file_paths = context.config.upload_file_paths()

        self.logger.info(f"Uploading {len(file_paths)} blobs to container {container_name}...")
        context.uploaded_blobs = layer_storage.upload_blobs(
            self.provider, context.connection_string, container_name, file_paths
        )
        self.logger.info(f"Uploaded {len(file_paths)} blobs to container {container_name}")
        return context.uploaded_blobs

    def create_web_app(self, context: DeploymentContext):
        app_name = context.names.web_app

        self.logger.info(f"Creating web app {app_name}...")
        site_config = layer_web_app.build_site_config(
            context.connection_string,
            context.names.container,
            port=context.config.app_port,
        )
        context.web_app = layer_web_app.create_web_app(
            self.provider,
            context.resource_group,
            app_name,
            context.config.region,
            site_config,
            app_service_plan_id=context.config.app_service_plan_id,
        )
        self.logger.info(f"Created web app {app_name}")
        self.logger.info(layer_web_app.describe_resource(context.web_app))
        return context.web_app

    def deploy_archive(self, context: DeploymentContext):
        app_name = context.names.web_app
        archive_path = context.config.deploy_archive_path()

        self.logger.info(f"Deploying {archive_path.name} to {app_name} through FTP...")
        profile = layer_web_app.get_publishing_profile(self.provider, context.resource_group, app_name)
        remote_path = deployment_helpers.upload_file_to_web_app(profile, archive_path)

        self.logger.info(f"Deployment {archive_path.name} to web app {app_name} completed")
        self.logger.info(layer_web_app.describe_resource(context.web_app))
        return remote_path

    def warm_up(self, context: DeploymentContext):
        """Two advisory GETs against the deployed app; failures only get logged."""
        config = context.config
        app_path = f"{context.names.web_app_host}/{Path(config.deploy_archive).stem}"
        url = f"http://{app_path}"

        self.logger.info(f"Warming up {app_path}...")
        deployment_helpers.check_address(
            url, timeout=config.http_timeout_seconds, is_running_mocked=config.is_running_mocked
        )
        time.sleep(config.warmup_delay_seconds)

        self.logger.info(f"CURLing {app_path}...")
        body = deployment_helpers.check_address(
            url, timeout=config.http_timeout_seconds, is_running_mocked=config.is_running_mocked
        )
        self.logger.info(body if body is not None else "(null)")
        return body

    # ==========================================
    # Cleanup
    # ==========================================

    def cleanup(self, context: DeploymentContext) -> None:
        """Delete the Resource Group. Never raises."""
        rg_name = context.resource_group
        if rg_name is None:
            self.logger.info("Did not create any resources in Azure. No clean up is necessary")
            return

        try:
            self.logger.info(f"Deleting Resource Group: {rg_name}")
            layer_setup_azure.destroy_resource_group(self.provider, rg_name)
            self.logger.info(f"Deleted Resource Group: {rg_name}")
        except Exception as e:
            self.logger.error(f"Failed to delete Resource Group {rg_name}: {type(e).__name__}: {e}")


def run_sample(
    provider: 'AzureProvider',
    config: SampleConfig,
    logger: Optional[logging.Logger] = None,
    interaction: Optional[Interaction] = None,
    naming: Optional[AzureNaming] = None
) -> bool:
    """
    Run the full workflow once with freshly generated resource names.

    Returns:
        True if every step succeeded
    """
    logger = logger or logging.getLogger(__name__)
    names = (naming or AzureNaming()).generate()
    context = DeploymentContext(config=config, names=names)

    workflow = LinuxWebAppWorkflow(provider, logger)
    orchestrator = Orchestrator(
        workflow.steps(),
        cleanup=workflow.cleanup,
        logger=logger,
        interaction=interaction,
    )
    return orchestrator.run(context)
