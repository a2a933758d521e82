"""
Shared Azure deployment helpers.

This module provides the transport-level helpers used after the Web App
exists:

    - Publishing profile parsing (FTP credentials from the profile XML)
    - FTP upload of an application archive into the Web App
    - HTTP GET/POST helpers used for warm-up probes
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from ftplib import FTP, error_perm
from pathlib import Path
from typing import Dict, Optional, Union
from urllib.parse import urlparse

import requests

import webapp_deployer.constants as CONSTANTS
from webapp_deployer.core.exceptions import PublishProfileError

logger = logging.getLogger(__name__)


# ==========================================
# Publishing Profile
# ==========================================

@dataclass
class PublishProfile:
    """FTP credentials of a Web App, parsed from its publishing profile."""

    publish_url: str
    user_name: str
    password: str
    passive_mode: bool = True

    @property
    def host(self) -> str:
        return urlparse(self.publish_url).hostname or ""

    @property
    def port(self) -> int:
        return urlparse(self.publish_url).port or CONSTANTS.FTP_PORT

    @property
    def remote_root(self) -> str:
        """Directory the publish URL points to, e.g. /site/wwwroot."""
        return urlparse(self.publish_url).path or "/"

    def __repr__(self) -> str:
        return f"PublishProfile(publish_url={self.publish_url!r}, user_name={self.user_name!r})"


def parse_publishing_profile(xml_content: Union[bytes, str]) -> PublishProfile:
    """
    Extract the FTP profile from a publishing profile XML document.

    Expected shape:
        <publishData>
          <publishProfile publishMethod="FTP" publishUrl="ftp://host/site/wwwroot"
                          userName="app\\$app" userPWD="..." ftpPassiveMode="True" />
        </publishData>

    Raises:
        PublishProfileError: Invalid XML, no FTP profile, or missing attributes
    """
    try:
        root = ET.fromstring(xml_content)
    except ET.ParseError as e:
        raise PublishProfileError(f"Invalid publishing profile XML: {e}")

    for profile in root.iter("publishProfile"):
        if profile.get("publishMethod", "").upper() != CONSTANTS.FTP_PUBLISH_METHOD:
            continue

        publish_url = profile.get("publishUrl")
        user_name = profile.get("userName")
        password = profile.get("userPWD")
        if not (publish_url and user_name and password):
            raise PublishProfileError(
                "FTP publishing profile is missing publishUrl, userName or userPWD"
            )
        if "://" not in publish_url:
            publish_url = f"ftp://{publish_url}"

        return PublishProfile(
            publish_url=publish_url,
            user_name=user_name,
            password=password,
            passive_mode=profile.get("ftpPassiveMode", "True").lower() == "true",
        )

    raise PublishProfileError("No FTP publishing profile found")


# ==========================================
# FTP Deployment
# ==========================================

def _ensure_remote_dir(ftp: FTP, directory: str) -> None:
    """Change into directory, creating it first when it does not exist."""
    try:
        ftp.cwd(directory)
    except error_perm:
        logger.debug(f"  Creating remote directory: {directory}")
        ftp.mkd(directory)
        ftp.cwd(directory)


def upload_file_to_web_app(
    profile: PublishProfile,
    file_path: Union[str, Path],
    file_name: Optional[str] = None,
    deploy_dir: Optional[str] = CONSTANTS.WEB_APP_DEPLOY_DIR
) -> str:
    """
    Upload a local file into the Web App over FTP.

    The file lands in {remote_root}/{deploy_dir}/{file_name}. Directory
    components inside file_name become remote sub-directories.

    Args:
        profile: FTP publishing profile of the Web App
        file_path: Local file to upload
        file_name: Remote file name (defaults to the local base name)
        deploy_dir: Sub-directory of the remote root (None for the root itself)

    Returns:
        Remote path of the uploaded file

    Raises:
        ftplib.all_errors: On any FTP failure
    """
    file_path = Path(file_path)
    if file_name is None:
        file_name = file_path.name

    parts = [part for part in file_name.replace("\\", "/").split("/") if part]
    if not parts:
        raise ValueError(f"Invalid remote file name: {file_name!r}")
    remote_dirs = ([deploy_dir] if deploy_dir else []) + parts[:-1]
    remote_name = parts[-1]

    with FTP() as ftp:
        ftp.connect(profile.host, profile.port)
        ftp.login(profile.user_name, profile.password)
        ftp.set_pasv(profile.passive_mode)
        ftp.cwd(profile.remote_root)
        for directory in remote_dirs:
            _ensure_remote_dir(ftp, directory)
        with open(file_path, "rb") as data:
            ftp.storbinary(f"STOR {remote_name}", data)

    remote_path = "/".join([profile.remote_root.rstrip("/")] + remote_dirs + [remote_name])
    logger.debug(f"  ✓ Uploaded {file_path} to {profile.host}{remote_path}")
    return remote_path


# ==========================================
# HTTP Probes
# ==========================================

def check_address(
    url: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = CONSTANTS.DEFAULT_HTTP_TIMEOUT_SECONDS,
    is_running_mocked: bool = False
) -> Optional[str]:
    """
    GET url and return the response body.

    Network failures are logged and reported as None, never raised. In
    mocked mode no request is sent.
    """
    if is_running_mocked:
        return CONSTANTS.PLAYBACK_MODE_RESPONSE

    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        return response.text
    except requests.exceptions.RequestException as e:
        logger.warning(f"GET {url} failed: {e}")
        return None


def post_address(
    url: str,
    body: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = CONSTANTS.DEFAULT_HTTP_TIMEOUT_SECONDS,
    is_running_mocked: bool = False
) -> Optional[str]:
    """
    POST body to url and return a short status description.

    Same failure semantics as check_address().
    """
    if is_running_mocked:
        return CONSTANTS.PLAYBACK_MODE_RESPONSE

    try:
        response = requests.post(url, data=body, headers=headers, timeout=timeout)
        return f"{response.status_code} {response.reason}"
    except requests.exceptions.RequestException as e:
        logger.warning(f"POST {url} failed: {e}")
        return None
