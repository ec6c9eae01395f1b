from __future__ import annotations

from application.services.event_hub_selector import connect_event_hub
from bootstrap.bootstrap_context import BootstrapContext
from bootstrap.phases.base_phase import BootstrapPhase, PhaseResult
from bootstrap.steps import BootstrapStep


class EventHubPhase(BootstrapPhase):
    """Step 9: select the event peer and connect the event hub."""

    step = BootstrapStep.CONNECT_EVENT_HUB
    requires_setup = ('client', 'channel')

    async def execute(self, context: BootstrapContext) -> PhaseResult:
        event_hub = await connect_event_hub(context.setup.client)
        context.setup.event_hub = event_hub
        return PhaseResult.success_result(f'Event hub connected to {event_hub.peer_addr}')
