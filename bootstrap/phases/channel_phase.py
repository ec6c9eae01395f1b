from __future__ import annotations
from pathlib import Path
from typing import Optional

from bootstrap.bootstrap_context import BootstrapContext
from bootstrap.phases.base_phase import BootstrapPhase, PhaseResult
from bootstrap.steps import BootstrapStep


class ChannelHandlePhase(BootstrapPhase):
    """Step 4: create the in-memory channel handle. No peer is bound to it yet."""

    step = BootstrapStep.CREATE_CHANNEL
    requires = ('settings',)
    requires_setup = ('client',)

    def resource(self, context: BootstrapContext) -> Optional[str]:
        return context.settings.channel_id if context.settings else None

    async def execute(self, context: BootstrapContext) -> PhaseResult:
        channel_id = context.settings.channel_id
        context.setup.channel = await context.setup.client.new_channel(channel_id)
        return PhaseResult.success_result(f"Channel handle '{channel_id}' created")


class ChannelJoinPhase(BootstrapPhase):
    """
    Step 7: submit the channel creation transaction and join the configured peers.

    Nothing done by earlier steps is undone when this fails.
    """

    step = BootstrapStep.CREATE_AND_JOIN_CHANNEL
    requires = ('settings', 'orderer_admin', 'org_admin')
    requires_setup = ('client', 'channel')

    def resource(self, context: BootstrapContext) -> Optional[str]:
        return context.settings.channel_id if context.settings else None

    async def execute(self, context: BootstrapContext) -> PhaseResult:
        config_tx = Path(context.settings.channel_config)
        if not config_tx.is_file():
            raise FileNotFoundError(f'Channel configuration transaction not found: {config_tx}')

        channel = context.setup.channel
        await context.setup.client.create_and_join_channel(
            context.orderer_admin, context.org_admin, channel, str(config_tx)
        )
        joined = channel.get_peers()
        return PhaseResult.success_result(
            f"Channel '{channel.name}' created, {len(joined)} peer(s) joined",
            metadata={'joined_peers': len(joined)},
        )


class UserContextPhase(BootstrapPhase):
    """Step 8: later proposals are signed by the organisation admin."""

    step = BootstrapStep.SWITCH_USER_CONTEXT
    requires = ('org_admin',)
    requires_setup = ('client',)

    async def execute(self, context: BootstrapContext) -> PhaseResult:
        context.setup.client.set_user_context(context.org_admin)
        return PhaseResult.success_result('Client user context switched to the organisation admin')
