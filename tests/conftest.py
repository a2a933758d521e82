import logging
import uuid

import pytest
from unittest.mock import MagicMock, patch

from webapp_deployer.core.context import DeploymentContext, RunNames, SampleConfig


PROFILE_XML = (
    b'<publishData>'
    b'<publishProfile profileName="webapp1-42 - Web Deploy" publishMethod="MSDeploy" '
    b'publishUrl="webapp1-42.scm.azurewebsites.net:443" userName="$webapp1-42" userPWD="msdeploy-pwd" />'
    b'<publishProfile profileName="webapp1-42 - FTP" publishMethod="FTP" '
    b'publishUrl="ftp://waws-prod-blu-001.ftp.azurewebsites.windows.net/site/wwwroot" '
    b'ftpPassiveMode="True" userName="webapp1-42\\$webapp1-42" userPWD="ftp-pwd" />'
    b'</publishData>'
)

WEB_APP_ID = "/subscriptions/sub-123/resourceGroups/rg1NEMV_7/providers/Microsoft.Web/sites/webapp1-42"


class _ListHandler(logging.Handler):
    """Collects formatted log messages in memory."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


@pytest.fixture(autouse=True)
def mock_sleep(monkeypatch):
    """Skip time.sleep calls to speed up tests."""
    monkeypatch.setattr("time.sleep", lambda x: None)


@pytest.fixture
def captured_logger():
    """A private logger whose messages are available as logger.messages."""
    logger = logging.getLogger(f"tests.captured.{uuid.uuid4().hex}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = _ListHandler()
    logger.addHandler(handler)
    logger.messages = handler.messages
    yield logger
    logger.removeHandler(handler)


@pytest.fixture
def sample_config(tmp_path):
    """SampleConfig pointing at real asset files in a temporary project."""
    asset_dir = tmp_path / "Asset"
    asset_dir.mkdir()
    (asset_dir / "helloworld.war").write_bytes(b"helloworld")
    (asset_dir / "install_apache.sh").write_text("#!/bin/sh\napt-get install -y apache2\n")
    (asset_dir / "azure-samples-blob-traverser.war").write_bytes(b"traverser")
    return SampleConfig(project_path=tmp_path, is_running_mocked=True)


@pytest.fixture
def run_names():
    return RunNames(
        web_app="webapp1-42",
        storage_account="jsdkstore13",
        container="jcontainer99",
        resource_group="rg1NEMV_7",
    )


@pytest.fixture
def deployment_context(sample_config, run_names):
    return DeploymentContext(config=sample_config, names=run_names)


@pytest.fixture
def mock_azure_provider():
    """Create a mock AzureProvider whose SDK calls all succeed."""
    provider = MagicMock()
    provider.location = "eastus"
    provider.subscription_id = "sub-123"

    provider.clients = {
        "resource": MagicMock(),
        "storage": MagicMock(),
        "web": MagicMock(),
    }

    key = MagicMock()
    key.value = "secret-key"
    provider.clients["storage"].storage_accounts.list_keys.return_value.keys = [key]

    web_app = MagicMock()
    web_app.id = WEB_APP_ID
    web_app.name = "webapp1-42"
    provider.clients["web"].web_apps.begin_create_or_update.return_value.result.return_value = web_app
    provider.clients["web"].web_apps.list_publishing_profile_xml_with_secrets.return_value = [PROFILE_XML]

    provider.container_client.return_value = MagicMock()
    return provider


@pytest.fixture
def mock_ftp():
    """Patch ftplib.FTP in the deployment helpers; yields the session mock."""
    with patch("webapp_deployer.providers.azure.layers.deployment_helpers.FTP") as ftp_cls:
        yield ftp_cls.return_value.__enter__.return_value


@pytest.fixture
def profile_xml():
    return PROFILE_XML


@pytest.fixture
def web_app_id():
    return WEB_APP_ID
