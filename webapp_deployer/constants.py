from pathlib import Path

# ==========================================
# 1. Credentials (environment variables)
# ==========================================
ENV_CLIENT_ID = "CLIENT_ID"
ENV_CLIENT_SECRET = "CLIENT_SECRET"
ENV_TENANT_ID = "TENANT_ID"
ENV_SUBSCRIPTION_ID = "SUBSCRIPTION_ID"

REQUIRED_CREDENTIAL_ENV_VARS = [
    ENV_CLIENT_ID,
    ENV_CLIENT_SECRET,
    ENV_TENANT_ID,
    ENV_SUBSCRIPTION_ID,
]

# ==========================================
# 2. Resource Naming
# ==========================================
WEB_APP_NAME_PREFIX = "webapp1-"
STORAGE_ACCOUNT_NAME_PREFIX = "jsdkstore"
CONTAINER_NAME_PREFIX = "jcontainer"
RESOURCE_GROUP_NAME_PREFIX = "rg1NEMV_"

# Random suffix is drawn from [0, RANDOM_NAME_SUFFIX_BOUND)
RANDOM_NAME_SUFFIX_BOUND = 9999

WEB_APP_HOST_SUFFIX = ".azurewebsites.net"

# ==========================================
# 3. Defaults (overridable via config file / CLI)
# ==========================================
DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_REGION = "eastus"
DEFAULT_PROJECT_PATH = Path(".")
DEFAULT_ASSET_DIR_NAME = "Asset"
DEFAULT_UPLOAD_FILES = ["helloworld.war", "install_apache.sh"]
DEFAULT_DEPLOY_ARCHIVE = "azure-samples-blob-traverser.war"

DEFAULT_STORAGE_SKU = "Standard_LRS"
DEFAULT_STORAGE_KIND = "Storage"
DEFAULT_APP_PORT = "8080"

DEFAULT_WARMUP_DELAY_SECONDS = 5
DEFAULT_HTTP_TIMEOUT_SECONDS = 300

# ==========================================
# 4. Web App Site Configuration
# ==========================================
STORAGE_CONNECTION_STRING_NAME = "storage.connectionString"
STORAGE_CONTAINER_SETTING_NAME = "storage.containerName"
PORT_SETTING_NAME = "PORT"
CONNECTION_STRING_TYPE = "Custom"

WEB_APP_KIND = "app,linux"
WEB_APP_RUNTIME = {
    "linuxFxVersion": "TOMCAT|9.0-java11",
    "javaVersion": "11",
    "javaContainer": "TOMCAT",
    "javaContainerVersion": "9.0",
}

# ==========================================
# 5. Deployment
# ==========================================
PUBLISHING_PROFILE_FORMAT = "Ftp"
FTP_PUBLISH_METHOD = "FTP"
WEB_APP_DEPLOY_DIR = "webapps"
FTP_PORT = 21

PLAYBACK_MODE_RESPONSE = "[Running in PlaybackMode]"
