"""
Azure resource naming for a single run.

Every run gets fresh names built from a fixed prefix and a random integer
suffix in [0, 9999), so nothing is ever reused between runs:

    - Web App:         webapp1-{n}
    - Storage Account: jsdkstore{n}   (3-24 chars, lowercase alphanumeric)
    - Blob Container:  jcontainer{n}
    - Resource Group:  rg1NEMV_{n}

Usage:
    from webapp_deployer.providers.azure.naming import AzureNaming

    names = AzureNaming().generate()
    names.storage_account  # "jsdkstore4821"
"""

import random
import re
from typing import Optional, Set

import webapp_deployer.constants as CONSTANTS
from webapp_deployer.core.context import RunNames

_STORAGE_ACCOUNT_NAME_PATTERN = re.compile(r"^[a-z0-9]{3,24}$")


def create_random_name(prefix: str, rng: Optional[random.Random] = None) -> str:
    """
    Append a random suffix in [0, 9999) to prefix.

    Args:
        prefix: Fixed name prefix
        rng: Random source (module-level random when None)
    """
    source = rng or random
    return f"{prefix}{source.randrange(CONSTANTS.RANDOM_NAME_SUFFIX_BOUND)}"


def is_valid_storage_account_name(name: str) -> bool:
    """Storage account names: 3-24 chars, lowercase letters and digits only."""
    return bool(_STORAGE_ACCOUNT_NAME_PATTERN.match(name))


class AzureNaming:
    """
    Generates the randomized resource names of one run.

    Names handed out by one instance never repeat.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._issued: Set[str] = set()

    def random_name(self, prefix: str) -> str:
        """Random name for prefix that was not issued before by this instance."""
        while True:
            name = create_random_name(prefix, self._rng)
            if name not in self._issued:
                self._issued.add(name)
                return name

    def web_app(self) -> str:
        return self.random_name(CONSTANTS.WEB_APP_NAME_PREFIX)

    def storage_account(self) -> str:
        name = self.random_name(CONSTANTS.STORAGE_ACCOUNT_NAME_PREFIX)
        if not is_valid_storage_account_name(name):
            raise ValueError(f"Invalid storage account name generated: {name}")
        return name

    def container(self) -> str:
        return self.random_name(CONSTANTS.CONTAINER_NAME_PREFIX)

    def resource_group(self) -> str:
        return self.random_name(CONSTANTS.RESOURCE_GROUP_NAME_PREFIX)

    def generate(self) -> RunNames:
        """Fresh set of names for a run."""
        return RunNames(
            web_app=self.web_app(),
            storage_account=self.storage_account(),
            container=self.container(),
            resource_group=self.resource_group(),
        )
