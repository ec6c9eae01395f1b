from __future__ import annotations

from bootstrap.bootstrap_context import BootstrapContext
from bootstrap.phases.base_phase import BootstrapPhase, PhaseResult
from bootstrap.steps import BootstrapStep


class ReadinessPhase(BootstrapPhase):
    """Step 10: flip the readiness flag once every handle is in place."""

    step = BootstrapStep.MARK_READY
    requires = ('setup',)

    async def execute(self, context: BootstrapContext) -> PhaseResult:
        context.setup.mark_ready()
        return PhaseResult.success_result(f"Setup context for '{context.setup.channel_id}' is ready")
