"""
Azure resource layers.

    layer_setup_azure: Resource Group create/destroy/check
    layer_storage: Storage Account, access key, connection string, blob upload
    layer_web_app: Web App site config, creation, publishing profile
    deployment_helpers: FTP archive upload and HTTP warm-up helpers
"""
