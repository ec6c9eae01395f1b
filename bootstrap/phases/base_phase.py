"""
Base Phase - Abstract interface for all bootstrap phases.

A phase performs exactly one step of the bootstrap sequence. It reads the
artifacts earlier phases stored on the ``BootstrapContext``, calls one
external collaborator, and stores its own artifact back. Failures are raised;
the executor turns them into the step's error and stops the run.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from bootstrap.bootstrap_context import BootstrapContext
from bootstrap.steps import BootstrapStep


@dataclass
class PhaseResult:
    """Result of a bootstrap phase execution."""
    success: bool
    message: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success_result(cls, message: str, metadata: Optional[Dict[str, Any]] = None) -> 'PhaseResult':
        return cls(success=True, message=message, metadata=metadata or {})

    @classmethod
    def failure_result(cls, message: str, metadata: Optional[Dict[str, Any]] = None) -> 'PhaseResult':
        return cls(success=False, message=message, metadata=metadata or {})


class BootstrapPhase(ABC):
    """
    Abstract base class for all bootstrap phases.

    Subclasses set ``step`` and list the context attributes they depend on in
    ``requires`` (names on ``BootstrapContext``) and ``requires_setup`` (names
    on the ``SetupContext`` under construction).
    """

    step: ClassVar[BootstrapStep]
    requires: ClassVar[Tuple[str, ...]] = ()
    requires_setup: ClassVar[Tuple[str, ...]] = ()

    def __init__(self):
        self.phase_name = self.__class__.__name__
        self.logger = logging.getLogger(f'bootstrap.{self.phase_name.lower()}')

    @abstractmethod
    async def execute(self, context: BootstrapContext) -> PhaseResult:
        """
        Execute this bootstrap phase.

        Args:
            context: BootstrapContext containing shared state

        Returns:
            PhaseResult describing what was produced
        """

    def resource(self, context: BootstrapContext) -> Optional[str]:
        """Name of the resource this phase acts on, used in error reports."""
        return None

    def validate_context(self, context: BootstrapContext) -> None:
        """Raise if an artifact this phase depends on has not been produced yet."""
        for attr in self.requires:
            context.require(attr)
        for attr in self.requires_setup:
            context.require_setup(attr)

    async def pre_execute(self, context: BootstrapContext) -> None:
        self.logger.debug(f'Starting phase: {self.phase_name} (step {self.step.number})')
        self.validate_context(context)

    async def post_execute(self, context: BootstrapContext, result: PhaseResult) -> None:
        if result.success:
            self.logger.info(f'✓ Phase completed: {self.phase_name} - {result.message}')
        else:
            self.logger.error(f'✗ Phase failed: {self.phase_name} - {result.message}')

    async def execute_with_hooks(self, context: BootstrapContext) -> PhaseResult:
        await self.pre_execute(context)
        result = await self.execute(context)
        await self.post_execute(context, result)
        return result


def phase_steps(phases: List[BootstrapPhase]) -> List[BootstrapStep]:
    return [phase.step for phase in phases]
