"""
Linux Web App + Storage Account Connection Deployer.

Provisions a resource group, a storage account with a couple of blobs and a
Linux web app wired to that storage account, deploys an application archive
over FTP, warms it up and tears everything down again.
"""

__version__ = "1.0.0"
