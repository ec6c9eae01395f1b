from __future__ import annotations
from pathlib import Path
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class EnrollmentCredentials(BaseModel):
    """Name and secret of a principal enrolled against the CA, plus the local credential store."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    name: str = Field(default='admin', min_length=1)
    secret: str = Field(default='adminpw', repr=False)
    store_path: str = Field(default='/tmp/enroll_user', description='Local identity cache directory.')


class IdentityMaterial(BaseModel):
    """A pre-enrolled principal described by its MSP keystore and signcerts directories."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    name: str = Field(..., min_length=1)
    keystore: str = Field(..., min_length=1)
    signcerts: str = Field(..., min_length=1)
    msp_id: Optional[str] = None

    def resolve(self, root: Union[str, Path]) -> 'IdentityMaterial':
        """Return a copy whose directories are anchored at ``root`` when relative."""
        base = Path(root)
        keystore = Path(self.keystore)
        signcerts = Path(self.signcerts)
        return self.model_copy(update={
            'keystore': str(keystore if keystore.is_absolute() else base / keystore),
            'signcerts': str(signcerts if signcerts.is_absolute() else base / signcerts),
        })

    def private_key_file(self) -> Path:
        return _single_file(self.keystore, 'keystore')

    def certificate_file(self) -> Path:
        return _single_file(self.signcerts, 'signcerts')


def _single_file(directory: str, label: str) -> Path:
    path = Path(directory)
    if path.is_file():
        return path
    if not path.is_dir():
        raise FileNotFoundError(f'{label} directory not found: {path}')
    files = sorted(p for p in path.iterdir() if p.is_file())
    if not files:
        raise FileNotFoundError(f'{label} directory is empty: {path}')
    if len(files) > 1:
        raise ValueError(f'{label} directory holds {len(files)} files, expected one: {path}')
    return files[0]
