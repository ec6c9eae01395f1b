from __future__ import annotations
from typing import ClassVar, Optional

from bootstrap.bootstrap_context import BootstrapContext
from bootstrap.phases.base_phase import BootstrapPhase, PhaseResult
from bootstrap.steps import BootstrapStep
from domain.identity import IdentityMaterial


class ClientEnrollmentPhase(BootstrapPhase):
    """Step 3: enroll the primary principal and create the client bound to it."""

    step = BootstrapStep.ENROLL_CLIENT
    requires = ('network_config', 'settings', 'setup')

    def resource(self, context: BootstrapContext) -> Optional[str]:
        return context.settings.enrollment.name if context.settings else None

    async def execute(self, context: BootstrapContext) -> PhaseResult:
        credentials = context.settings.enrollment
        client = await context.sdk.create_client(context.network_config, credentials)
        context.setup.client = client
        return PhaseResult.success_result(
            f"Client enrolled as '{credentials.name}' (store: {credentials.store_path})"
        )


class PreEnrolledIdentityPhase(BootstrapPhase):
    """Load an admin identity from the local MSP material named by ``material_attr``."""

    material_attr: ClassVar[str]
    target_attr: ClassVar[str]
    requires = ('network_config', 'settings')
    requires_setup = ('client',)

    def material(self, context: BootstrapContext) -> IdentityMaterial:
        material: IdentityMaterial = getattr(context.settings, self.material_attr)
        return material.resolve(context.network_config.client.crypto_config_path)

    def resource(self, context: BootstrapContext) -> Optional[str]:
        if context.settings is None:
            return None
        return getattr(context.settings, self.material_attr).name

    async def execute(self, context: BootstrapContext) -> PhaseResult:
        material = self.material(context)
        self.logger.debug(f"Resolving '{material.name}' from {material.keystore} / {material.signcerts}")
        user = await context.setup.client.get_pre_enrolled_user(material)
        setattr(context, self.target_attr, user)
        return PhaseResult.success_result(f"Identity '{material.name}' resolved")


class OrdererAdminPhase(PreEnrolledIdentityPhase):
    """Step 5: the orderer admin signs the channel creation transaction."""

    step = BootstrapStep.RESOLVE_ORDERER_ADMIN
    material_attr = 'orderer_admin'
    target_attr = 'orderer_admin'


class OrgAdminPhase(PreEnrolledIdentityPhase):
    """Step 6: the organisation admin joins peers and signs later proposals."""

    step = BootstrapStep.RESOLVE_ORG_ADMIN
    material_attr = 'org_admin'
    target_attr = 'org_admin'
