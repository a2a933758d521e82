"""
Azure provider: credential and SDK client initialization.

SDK Clients Initialized:
    - ResourceManagementClient: For Resource Group management
    - StorageManagementClient: For Storage Account management and key listing
    - WebSiteManagementClient: For Web App creation and publishing profiles

Blob data-plane clients are created on demand from a storage connection
string via container_client().

Usage:
    from webapp_deployer.providers.azure.provider import AzureProvider

    provider = AzureProvider()
    provider.initialize_clients(credentials, location="eastus")
    provider.clients["resource"].resource_groups.create_or_update(...)
"""

from typing import Any, Dict

from azure.identity import ClientSecretCredential
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.storage import StorageManagementClient
from azure.mgmt.web import WebSiteManagementClient
from azure.storage.blob import ContainerClient

from webapp_deployer.core.exceptions import ConfigurationError


class AzureProvider:
    """
    Holds the authenticated Azure SDK clients for one run.

    Attributes:
        name: Provider identifier ("azure")
        subscription_id: Subscription every management client is bound to
        location: Azure region used for all resources
        clients: Dictionary of initialized management clients
    """

    name: str = "azure"

    def __init__(self):
        self._subscription_id: str = ""
        self._location: str = ""
        self._credential: Any = None
        self._clients: Dict[str, Any] = {}
        self._initialized: bool = False

    @property
    def subscription_id(self) -> str:
        return self._subscription_id

    @property
    def location(self) -> str:
        return self._location

    @property
    def clients(self) -> Dict[str, Any]:
        """Return initialized SDK clients."""
        if not self._initialized:
            raise RuntimeError(
                "Provider not initialized. Call initialize_clients() first."
            )
        return self._clients

    def initialize_clients(self, credentials: dict, location: str) -> None:
        """
        Authenticate and build the management clients.

        Args:
            credentials: Dictionary with client_id, client_secret, tenant_id
                and subscription_id (see load_credentials_from_env)
            location: Azure region for all resources

        Raises:
            ConfigurationError: If a required credential is missing
        """
        for key in ("client_id", "client_secret", "tenant_id", "subscription_id"):
            if not credentials.get(key):
                raise ConfigurationError(f"Missing required credential '{key}'")

        self._subscription_id = credentials["subscription_id"]
        self._location = location

        self._credential = self._get_credential(credentials)
        self._initialize_sdk_clients(self._credential)

        self._initialized = True

    def _get_credential(self, credentials: dict) -> ClientSecretCredential:
        return ClientSecretCredential(
            tenant_id=credentials["tenant_id"],
            client_id=credentials["client_id"],
            client_secret=credentials["client_secret"]
        )

    def _initialize_sdk_clients(self, credential: Any) -> None:
        subscription_id = self._subscription_id

        self._clients["resource"] = ResourceManagementClient(credential=credential, subscription_id=subscription_id)
        self._clients["storage"] = StorageManagementClient(credential=credential, subscription_id=subscription_id)
        self._clients["web"] = WebSiteManagementClient(credential=credential, subscription_id=subscription_id)

    def container_client(self, connection_string: str, container_name: str) -> ContainerClient:
        """Blob container client authenticated with a storage connection string."""
        return ContainerClient.from_connection_string(
            conn_str=connection_string,
            container_name=container_name
        )
