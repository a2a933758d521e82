"""
Unit tests for per-run Azure resource naming.
"""

import random
import re

import pytest

from webapp_deployer.providers.azure.naming import (
    AzureNaming,
    create_random_name,
    is_valid_storage_account_name,
)


class _SequenceRandom:
    """Random stand-in returning a fixed sequence from randrange()."""

    def __init__(self, values):
        self._values = iter(values)

    def randrange(self, bound):
        return next(self._values)


class TestCreateRandomName:

    def test_prefix_and_suffix_in_range(self):
        rng = random.Random(1234)
        for _ in range(500):
            name = create_random_name("jsdkstore", rng)
            match = re.fullmatch(r"jsdkstore(\d+)", name)
            assert match
            assert 0 <= int(match.group(1)) < 9999

    def test_upper_bound_is_exclusive(self):
        class _Recording:
            bound = None

            def randrange(self, bound):
                self.bound = bound
                return bound - 1

        rng = _Recording()
        assert create_random_name("rg1NEMV_", rng) == "rg1NEMV_9998"
        assert rng.bound == 9999


class TestAzureNaming:

    def test_generate_uses_expected_prefixes(self):
        names = AzureNaming(random.Random(7)).generate()

        assert names.web_app.startswith("webapp1-")
        assert names.storage_account.startswith("jsdkstore")
        assert names.container.startswith("jcontainer")
        assert names.resource_group.startswith("rg1NEMV_")

    def test_names_unique_within_run(self):
        names = AzureNaming(random.Random(7)).generate()

        assert len({names.web_app, names.storage_account, names.container, names.resource_group}) == 4

    def test_same_prefix_never_repeats(self):
        naming = AzureNaming(_SequenceRandom([7, 7, 7, 8]))

        assert naming.web_app() == "webapp1-7"
        assert naming.web_app() == "webapp1-8"

    def test_web_app_host(self):
        names = AzureNaming(_SequenceRandom([42, 1, 2, 3])).generate()

        assert names.web_app_host == "webapp1-42.azurewebsites.net"

    def test_storage_account_name_is_valid(self):
        naming = AzureNaming(random.Random(99))
        for _ in range(50):
            assert is_valid_storage_account_name(naming.storage_account())

    @pytest.mark.parametrize("name,valid", [
        ("jsdkstore0", True),
        ("ab", False),
        ("JsdkStore1", False),
        ("jsdk-store1", False),
        ("a" * 24, True),
        ("a" * 25, False),
    ])
    def test_storage_account_name_rules(self, name, valid):
        assert is_valid_storage_account_name(name) is valid
