"""
Azure Setup Layer - Resource Group Management.

The Resource Group is the container for every resource of a run. It is
created first and deleted last; deleting it removes the storage account,
blob container and web app transitively.
"""

from typing import TYPE_CHECKING, Any
import logging

from azure.core.exceptions import (
    ResourceNotFoundError,
    HttpResponseError,
    ClientAuthenticationError,
    AzureError
)

from webapp_deployer.core.exceptions import ResourceDeletionError

if TYPE_CHECKING:
    from webapp_deployer.providers.azure.provider import AzureProvider

logger = logging.getLogger(__name__)


def create_resource_group(provider: 'AzureProvider', rg_name: str, location: str) -> Any:
    """
    Create the Resource Group and wait until it exists.

    Args:
        provider: Azure Provider instance with initialized clients
        rg_name: Resource Group name
        location: Azure region for the Resource Group

    Returns:
        The created ResourceGroup object

    Raises:
        azure.core.exceptions.HttpResponseError: If creation fails
    """
    logger.debug(f"Creating Resource Group: {rg_name} in {location}")

    try:
        resource_group = provider.clients["resource"].resource_groups.create_or_update(
            resource_group_name=rg_name,
            parameters={"location": location}
        )
        logger.debug(f"✓ Resource Group created: {rg_name}")
        return resource_group
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED creating Resource Group: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to create Resource Group: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error creating Resource Group: {type(e).__name__}: {e}")
        raise


def destroy_resource_group(provider: 'AzureProvider', rg_name: str) -> None:
    """
    Delete the Resource Group and ALL resources within it.

    Blocks until Azure reports the deletion as complete. A Resource Group
    that no longer exists is treated as already deleted.

    Args:
        provider: Azure Provider instance
        rg_name: Resource Group name

    Raises:
        ResourceDeletionError: If Azure rejects the deletion
    """
    try:
        poller = provider.clients["resource"].resource_groups.begin_delete(rg_name)
        poller.result()
    except ResourceNotFoundError:
        logger.info(f"Resource Group already deleted: {rg_name}")
    except AzureError as e:
        raise ResourceDeletionError("resource group", rg_name, e) from e
