"""
Web App Deployer - CLI Entry Point.

Authenticates with the service principal from the environment (CLIENT_ID,
CLIENT_SECRET, TENANT_ID, SUBSCRIPTION_ID) and runs the Linux Web App +
Storage Account workflow once.

Usage:
    webapp-deployer [--config config.json] [--region eastus] [--project-path .]
                    [--debug] [--pause-before-cleanup]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import webapp_deployer.constants as CONSTANTS
from webapp_deployer.core.config_loader import load_credentials_from_env, load_sample_config
from webapp_deployer.core.context import SampleConfig
from webapp_deployer.core.interaction import ConsoleInteraction, NonInteractive
from webapp_deployer.logger import logger, print_stack_trace, setup_logger
from webapp_deployer.providers.azure.provider import AzureProvider
from webapp_deployer.providers.azure.workflow import run_sample


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Deploy a Linux Web App connected to a Storage Account, then clean up"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=f"JSON config file (default: ./{CONSTANTS.DEFAULT_CONFIG_FILE} if present)",
    )
    parser.add_argument("--region", help="Azure region for all resources")
    parser.add_argument("--project-path", type=Path, help="Directory containing the Asset folder")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--pause-before-cleanup",
        action="store_true",
        help="Wait for ENTER before deleting the resource group",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SampleConfig:
    """Config file values, overridden by CLI flags."""
    if args.config is not None:
        config = load_sample_config(args.config, required=True)
    else:
        config = load_sample_config(Path(CONSTANTS.DEFAULT_CONFIG_FILE), required=False)

    if args.region:
        config.region = args.region
    if args.project_path:
        config.project_path = args.project_path
    if args.debug:
        config.mode = "DEBUG"
    if args.pause_before_cleanup:
        config.pause_before_cleanup = True
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = build_config(args)
        setup_logger(debug_mode=config.debug_mode)

        # Authenticate
        credentials = load_credentials_from_env()
        provider = AzureProvider()
        provider.initialize_clients(credentials, location=config.region)

        logger.info(f"Selected subscription: {provider.subscription_id}")

        interaction = ConsoleInteraction() if config.pause_before_cleanup else NonInteractive()
        if run_sample(provider, config, logger=logger, interaction=interaction):
            logger.info("✓ Sample completed")
        else:
            logger.warning("Sample did not complete, see errors above")
    except Exception as e:
        logger.error(f"{type(e).__name__}: {e}")
        print_stack_trace()

    return 0


if __name__ == "__main__":
    sys.exit(main())
