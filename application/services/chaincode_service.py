# application/services/chaincode_service.py
"""
Chaincode install / instantiate on a ready setup context.

Proposals go to the channel's whole peer set in a single call, signed by the
client's active identity (the organisation admin after bootstrap). Per-peer
responses are returned and reported, but success is all-or-nothing: one
failing peer or one SDK error fails the operation.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence

from bootstrap.exceptions import ChaincodeInstallError, ChaincodeInstantiateError
from bootstrap.setup_context import SetupContext
from domain.chaincode import ProposalOutcome, failed_outcomes, summarize_outcomes

logger = logging.getLogger(__name__)


class ChaincodeDeploymentService:

    async def install(self, setup: SetupContext) -> List[ProposalOutcome]:
        setup.require_ready('Chaincode install')
        chaincode = setup.chaincode
        chaincode.ensure_id()

        logger.info(
            f'Chaincode {chaincode.id} (version {chaincode.version}) will be installed '
            f'(runtime path: {chaincode.runtime_path} / chaincode path: {chaincode.path})'
        )

        peers = setup.channel.get_peers()
        if not peers:
            raise ChaincodeInstallError(
                f"Send install proposal return error: no peer joined channel '{setup.channel_id}'", resource=chaincode.id
            )
        try:
            outcomes = await setup.client.install_chaincode(setup.channel, chaincode, peers)
        except Exception as e:
            raise ChaincodeInstallError(f'Send install proposal return error: {e}', resource=chaincode.id) from e

        self._check_outcomes(outcomes, ChaincodeInstallError, 'Send install proposal', chaincode.id)
        logger.info(f'Chaincode {chaincode.id} installed (version {chaincode.version})')
        return outcomes

    async def instantiate(self, setup: SetupContext, args: Sequence[str] = (),
                          endorsement_policy: Optional[Dict[str, Any]] = None) -> List[ProposalOutcome]:
        setup.require_ready('Chaincode instantiate')
        chaincode = setup.chaincode
        if not chaincode.id:
            raise ChaincodeInstantiateError('Chaincode id is empty; install the chaincode first')

        logger.info(f"Chaincode {chaincode.id} (version {chaincode.version}) will be instantiated on '{setup.channel_id}'")
        peers = setup.channel.get_peers()
        if not peers:
            raise ChaincodeInstantiateError(
                f"Send instantiate proposal return error: no peer joined channel '{setup.channel_id}'", resource=chaincode.id
            )
        try:
            outcomes = await setup.client.instantiate_chaincode(
                setup.channel, chaincode, peers, list(args), endorsement_policy
            )
        except Exception as e:
            raise ChaincodeInstantiateError(f'Send instantiate proposal return error: {e}', resource=chaincode.id) from e

        self._check_outcomes(outcomes, ChaincodeInstantiateError, 'Send instantiate proposal', chaincode.id)
        logger.info(f"Chaincode {chaincode.id} instantiated on '{setup.channel_id}' (version {chaincode.version})")
        return outcomes

    async def install_and_instantiate(self, setup: SetupContext, args: Sequence[str] = (),
                                      endorsement_policy: Optional[Dict[str, Any]] = None) -> Dict[str, List[ProposalOutcome]]:
        installed = await self.install(setup)
        instantiated = await self.instantiate(setup, args, endorsement_policy)
        return {'install': installed, 'instantiate': instantiated}

    @staticmethod
    def _check_outcomes(outcomes: List[ProposalOutcome], error_class, operation: str, chaincode_id: str) -> None:
        failed = failed_outcomes(outcomes)
        for outcome in outcomes:
            marker = '✓' if outcome.success else '✗'
            logger.debug(f'  {marker} {outcome.describe()}')
        if failed:
            raise error_class(
                f'{operation} return error: {len(failed)}/{len(outcomes)} peer(s) failed: {summarize_outcomes(failed)}',
                resource=chaincode_id,
                outcomes=outcomes,
            )
