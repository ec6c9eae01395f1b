from __future__ import annotations

from bootstrap.bootstrap_config import BootstrapSettings
from bootstrap.bootstrap_context import BootstrapContext
from bootstrap.phases.base_phase import BootstrapPhase, PhaseResult
from bootstrap.setup_context import SetupContext
from bootstrap.steps import BootstrapStep


class ConfigurationPhase(BootstrapPhase):
    """Step 1: read the configuration file and open the setup context."""

    step = BootstrapStep.LOAD_CONFIG

    def resource(self, context: BootstrapContext) -> str:
        return str(context.config_path)

    async def execute(self, context: BootstrapContext) -> PhaseResult:
        loader = context.config_loader
        document = loader.read_document(context.config_path)
        context.network_config = loader.parse_network_config(document, source=str(context.config_path))

        if context.settings is None:
            section = loader.bootstrap_section(document, context.settings_overrides)
            context.settings = BootstrapSettings.model_validate(section)

        settings = context.settings
        context.setup = SetupContext(
            channel_id=settings.channel_id,
            channel_config=settings.channel_config,
            chaincode=settings.chaincode.model_copy(),
        )
        return PhaseResult.success_result(
            f'Configuration loaded from {context.config_path}',
            metadata={
                'peers': [p.name for p in context.network_config.peers],
                'orderers': [o.name for o in context.network_config.orderers],
                'channel_id': settings.channel_id,
            },
        )


class CryptoProviderPhase(BootstrapPhase):
    """Step 2: initialize the cryptographic service provider from the crypto section."""

    step = BootstrapStep.INIT_CRYPTO
    requires = ('network_config',)

    async def execute(self, context: BootstrapContext) -> PhaseResult:
        crypto = context.network_config.crypto
        await context.sdk.init_crypto_provider(crypto)
        return PhaseResult.success_result(
            f'Crypto provider {crypto.provider} ready (P-{crypto.security_level}/{crypto.hash_algorithm})'
        )
