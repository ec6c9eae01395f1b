# bootstrap/__main__.py
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from application.services.chaincode_service import ChaincodeDeploymentService
from bootstrap.bootstrap_config import DEFAULT_CONFIG_PATH
from bootstrap.core.orchestrator import BootstrapOrchestrator
from bootstrap.exceptions import BootstrapError
from domain.ports.ledger_sdk_port import LedgerSDKPort

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='python -m bootstrap',
        description='Create and join a Fabric channel, connect the event hub and optionally deploy chaincode.',
    )
    parser.add_argument('--config', default=DEFAULT_CONFIG_PATH, help='Network configuration file (YAML)')
    parser.add_argument('--channel-id', help='Channel to create and join')
    parser.add_argument('--channel-config', help='Channel creation transaction (.tx)')
    parser.add_argument('--chaincode-id', help='Chaincode id; an empty string generates one at install time')
    parser.add_argument('--chaincode-version', help='Chaincode version')
    parser.add_argument('--install-chaincode', action='store_true', help='Install the chaincode once the channel is ready')
    parser.add_argument('--instantiate', action='store_true', help='Instantiate the chaincode after installing it')
    parser.add_argument('--init-arg', action='append', default=[], dest='init_args', metavar='ARG',
                        help='Argument for the chaincode Init call (repeatable)')
    parser.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    parser.add_argument('--version', action='store_true', help='Print the version and exit')
    return parser


def settings_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if args.channel_id:
        overrides['channel_id'] = args.channel_id
    if args.channel_config:
        overrides['channel_config'] = args.channel_config
    chaincode: Dict[str, Any] = {}
    if args.chaincode_id is not None:
        chaincode['id'] = args.chaincode_id
    if args.chaincode_version:
        chaincode['version'] = args.chaincode_version
    if chaincode:
        overrides['chaincode'] = chaincode
    return overrides


async def run(args: argparse.Namespace, sdk: Optional[LedgerSDKPort] = None) -> int:
    if sdk is None:
        from infrastructure.fabric import HfcLedgerSDK
        sdk = HfcLedgerSDK()

    orchestrator = BootstrapOrchestrator(
        sdk,
        config_path=args.config,
        settings_overrides=settings_overrides(args),
    )
    try:
        setup = await orchestrator.execute_bootstrap()
    except BootstrapError as e:
        print(f'\n✗ BOOTSTRAP FAILED: {e}')
        return 1

    try:
        if args.install_chaincode or args.instantiate:
            service = ChaincodeDeploymentService()
            if args.instantiate:
                await service.install_and_instantiate(setup, args.init_args)
            else:
                await service.install(setup)
    except BootstrapError as e:
        print(f'\n✗ CHAINCODE DEPLOYMENT FAILED: {e}')
        return 1
    finally:
        await setup.close()

    print(f'\n=== Bootstrap Summary (Run ID: {orchestrator.run_id}) ===')
    print(f'Channel: {setup.channel_id}')
    print(f'Chaincode: {setup.chaincode_id} ({setup.chaincode_version})')
    print(f'Ready: {setup.initialized}')
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.version:
        from bootstrap import __version__
        print(f'Fabric Bootstrap {__version__}')
        return 0

    load_dotenv()
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        print('\n✗ Bootstrap interrupted by user')
        return 130


if __name__ == '__main__':
    sys.exit(main())
