"""
Azure Storage Layer.

Components Managed:
    - Storage Account: created with the configured SKU and kind
    - Access Key: first key of the account, read right after creation
    - Connection String: assembled locally from account name and key
    - Blob Container: created on first upload if missing
    - Blobs: one per local file, named after the file's base name

Architecture:
    Storage Account --(key)--> Connection String --> Blob Container <- local files
                                      │
                                      └──> Web App connection string (layer_web_app)
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, List, Union
import logging
import re

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
    ResourceExistsError,
)

from webapp_deployer.core.exceptions import ResourceCreationError

if TYPE_CHECKING:
    from webapp_deployer.providers.azure.provider import AzureProvider

logger = logging.getLogger(__name__)

CONNECTION_STRING_TEMPLATE = "DefaultEndpointsProtocol=https;AccountName={0};AccountKey={1}"


# ==========================================
# Helper Functions
# ==========================================

def build_connection_string(account_name: str, account_key: str) -> str:
    """
    Assemble the storage connection string consumed by the web app.

    >>> build_connection_string("X", "Y")
    'DefaultEndpointsProtocol=https;AccountName=X;AccountKey=Y'
    """
    return CONNECTION_STRING_TEMPLATE.format(account_name, account_key)


def derive_blob_name(file_path: Union[str, Path]) -> str:
    """
    Blob name for a local file: its base name with every directory stripped.

    Both "/" and "\\" count as separators; repeated or trailing separators
    are ignored.

    >>> derive_blob_name("a/b/c.war")
    'c.war'
    >>> derive_blob_name("noSlash.sh")
    'noSlash.sh'
    """
    parts = [part for part in re.split(r"[\\/]+", str(file_path)) if part]
    if not parts:
        raise ValueError(f"Cannot derive a blob name from path: {file_path!r}")
    return parts[-1]


# ==========================================
# Storage Account
# ==========================================

def create_storage_account(
    provider: 'AzureProvider',
    rg_name: str,
    account_name: str,
    location: str,
    sku: str,
    kind: str
) -> Any:
    """
    Create a Storage Account and wait for provisioning to finish.

    Args:
        provider: Azure Provider instance
        rg_name: Resource Group name
        account_name: Storage account name (3-24 chars, lowercase alphanumeric)
        location: Azure region
        sku: SKU name (e.g. "Standard_LRS")
        kind: Account kind (e.g. "Storage", "StorageV2")

    Returns:
        The created StorageAccount object
    """
    logger.debug(f"Creating Storage Account: {account_name} ({sku}, {kind})")

    try:
        poller = provider.clients["storage"].storage_accounts.begin_create(
            resource_group_name=rg_name,
            account_name=account_name,
            parameters={
                "location": location,
                "sku": {"name": sku},
                "kind": kind,
            }
        )
        account = poller.result()

        logger.debug(f"✓ Storage Account created: {account_name}")
        return account
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED creating Storage Account: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to create Storage Account: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error creating Storage Account: {type(e).__name__}: {e}")
        raise


def get_storage_account_key(provider: 'AzureProvider', rg_name: str, account_name: str) -> str:
    """
    Read the first access key of a Storage Account.

    Raises:
        ResourceCreationError: If the account returned no keys
    """
    result = provider.clients["storage"].storage_accounts.list_keys(
        resource_group_name=rg_name,
        account_name=account_name
    )

    keys = list(getattr(result, "keys", None) or [])
    if not keys or not keys[0].value:
        raise ResourceCreationError(
            "storage account key",
            account_name,
            reason="no access keys returned"
        )
    return keys[0].value


# ==========================================
# Blob Upload
# ==========================================

def upload_blobs(
    provider: 'AzureProvider',
    connection_string: str,
    container_name: str,
    file_paths: Iterable[Union[str, Path]]
) -> List[str]:
    """
    Upload local files into a blob container, overwriting existing blobs.

    The container is created if it does not exist yet. Files are uploaded
    one at a time; the first failure propagates.

    Args:
        provider: Azure Provider instance
        connection_string: Storage connection string
        container_name: Target container
        file_paths: Local files to upload

    Returns:
        Names of the uploaded blobs, in upload order
    """
    container_client = provider.container_client(connection_string, container_name)

    try:
        container_client.create_container()
        logger.debug(f"✓ Blob container created: {container_name}")
    except ResourceExistsError:
        logger.debug(f"Blob container already exists: {container_name}")

    uploaded = []
    for file_path in file_paths:
        blob_name = derive_blob_name(file_path)
        with open(file_path, "rb") as data:
            container_client.upload_blob(name=blob_name, data=data, overwrite=True)
        logger.debug(f"  ✓ Uploaded {file_path} as {blob_name}")
        uploaded.append(blob_name)

    return uploaded
