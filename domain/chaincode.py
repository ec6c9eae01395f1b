# domain/chaincode.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional, Sequence
import shortuuid
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

__all__: Sequence[str] = (
    'ChaincodeDescriptor',
    'ProposalOutcome',
    'generate_chaincode_id',
    'failed_outcomes',
    'summarize_outcomes',
    'SUCCESS_STATUS',
)

SUCCESS_STATUS = 200


def generate_chaincode_id() -> str:
    return f'cc-{shortuuid.uuid()}'


class ChaincodeDescriptor(BaseModel):
    """Identity of a deployable contract. ``id`` is filled in at install time when left empty."""
    model_config = ConfigDict(extra='forbid', validate_assignment=True)

    id: str = Field(default='heroes-service')
    version: str = Field(default='v1.0.0', min_length=1)
    path: str = Field(default='github.com/chainhero/heroes-service/chaincode', min_length=1, description='Chaincode source path, relative to the runtime path.')
    runtime_path: str = Field(default='', description='Module search root used to package the chaincode (GOPATH for Go chaincode).')
    language: Literal['GOLANG', 'NODE', 'JAVA'] = Field(default='GOLANG')

    _generated_id: Optional[str] = PrivateAttr(default=None)

    def ensure_id(self) -> str:
        """Fill an empty id with a fresh one. A generated id is replaced on every call, never reused."""
        if not self.id or self.id == self._generated_id:
            self.id = generate_chaincode_id()
            self._generated_id = self.id
        return self.id

    @property
    def id_generated(self) -> bool:
        return self._generated_id is not None and self.id == self._generated_id


@dataclass(frozen=True)
class ProposalOutcome:
    """Response of one peer to an install or instantiate proposal."""
    peer: str
    status: int
    message: str = ''

    @property
    def success(self) -> bool:
        return self.status == SUCCESS_STATUS

    def describe(self) -> str:
        suffix = f' ({self.message})' if self.message else ''
        return f'{self.peer}: {self.status}{suffix}'


def failed_outcomes(outcomes: Sequence[ProposalOutcome]) -> list[ProposalOutcome]:
    return [o for o in outcomes if not o.success]


def summarize_outcomes(outcomes: Sequence[ProposalOutcome], limit: Optional[int] = None) -> str:
    items = list(outcomes)[:limit] if limit else list(outcomes)
    return ', '.join(o.describe() for o in items)
