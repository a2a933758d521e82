"""
Azure Web App Layer.

Components Managed:
    - Linux Web App: created with its full site configuration in one call
      (connection string + app settings + runtime fields); never updated
      afterwards
    - Publishing Profile: FTP credentials fetched right before deployment

Site Configuration:
    connectionStrings:
        storage.connectionString (type Custom) -> storage account
    appSettings:
        storage.containerName -> blob container populated by layer_storage
        PORT                  -> 8080
"""

from typing import TYPE_CHECKING, Any, Dict, Optional
import logging

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
)

import webapp_deployer.constants as CONSTANTS
from webapp_deployer.providers.azure.layers.deployment_helpers import (
    PublishProfile,
    parse_publishing_profile,
)

if TYPE_CHECKING:
    from webapp_deployer.providers.azure.provider import AzureProvider

logger = logging.getLogger(__name__)


def build_site_config(
    connection_string: str,
    container_name: str,
    port: str = CONSTANTS.DEFAULT_APP_PORT
) -> Dict[str, Any]:
    """
    Site configuration embedding the storage connection and app settings.

    Args:
        connection_string: Storage connection string
        container_name: Blob container the app reads from
        port: Value of the PORT app setting

    Returns:
        siteConfig dictionary for web_apps.begin_create_or_update
    """
    site_config = dict(CONSTANTS.WEB_APP_RUNTIME)
    site_config["connectionStrings"] = [
        {
            "name": CONSTANTS.STORAGE_CONNECTION_STRING_NAME,
            "connectionString": connection_string,
            "type": CONSTANTS.CONNECTION_STRING_TYPE,
        }
    ]
    site_config["appSettings"] = [
        {"name": CONSTANTS.STORAGE_CONTAINER_SETTING_NAME, "value": container_name},
        {"name": CONSTANTS.PORT_SETTING_NAME, "value": str(port)},
    ]
    return site_config


def create_web_app(
    provider: 'AzureProvider',
    rg_name: str,
    app_name: str,
    location: str,
    site_config: Dict[str, Any],
    app_service_plan_id: Optional[str] = None
) -> Any:
    """
    Create a Linux Web App and wait for it to be provisioned.

    No App Service Plan is created here. When app_service_plan_id is None
    the site is submitted without a serverFarmId.

    Args:
        provider: Azure Provider instance
        rg_name: Resource Group name
        app_name: Web App name (becomes {app_name}.azurewebsites.net)
        location: Azure region
        site_config: Output of build_site_config()
        app_service_plan_id: Optional existing plan resource ID

    Returns:
        The created Site object
    """
    properties: Dict[str, Any] = {
        "reserved": True,  # Linux
        "siteConfig": site_config,
    }
    if app_service_plan_id:
        properties["serverFarmId"] = app_service_plan_id

    params = {
        "location": location,
        "kind": CONSTANTS.WEB_APP_KIND,
        "properties": properties,
    }

    try:
        poller = provider.clients["web"].web_apps.begin_create_or_update(
            resource_group_name=rg_name,
            name=app_name,
            site_envelope=params
        )
        app = poller.result()
        logger.debug(f"✓ Web App created: {app_name}")
        return app
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED creating Web App: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to create Web App: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error creating Web App: {type(e).__name__}: {e}")
        raise


def get_publishing_profile(provider: 'AzureProvider', rg_name: str, app_name: str) -> PublishProfile:
    """
    Fetch the FTP publishing profile (with secrets) of a Web App.

    Raises:
        PublishProfileError: If the returned XML holds no usable FTP profile
    """
    chunks = provider.clients["web"].web_apps.list_publishing_profile_xml_with_secrets(
        resource_group_name=rg_name,
        name=app_name,
        publishing_profile_options={"format": CONSTANTS.PUBLISHING_PROFILE_FORMAT}
    )
    xml_content = b"".join(chunks)
    return parse_publishing_profile(xml_content)


def describe_resource(resource: Any) -> str:
    """
    Human readable summary of an ARM resource.

    Resource IDs look like
    /subscriptions/{sub}/resourceGroups/{rg}/providers/{namespace}/{type}/{name}
    """
    resource_id = str(getattr(resource, "id", "") or "")
    parts = resource_id.split("/")
    rg_name = parts[4] if len(parts) > 4 else ""
    namespace = parts[6] if len(parts) > 6 else ""
    name = getattr(resource, "name", None) or parts[-1]

    return (
        f"Resource: {resource_id}"
        f"\n\tName: {name}"
        f"\n\tResourceGroupName: {rg_name}"
        f"\n\tNamespace Name: {namespace}"
    )
