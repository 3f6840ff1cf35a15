"""Property Schemas — DB record, ledger record, and the merged client views.

Invariants:
    - matriculaId is the join key across PropertyRecord and ChainPropertyRecord
    - ChainPropertyRecord fields are all nullable: the ledger may know only part of it
    - PropertyFull.blockchainData is always present (defaults fill a missing ledger record)
"""

from pydantic import BaseModel, ConfigDict

Number = int | float


class PropertyRecord(BaseModel):
    """Property as recorded by the Orchestrator (source of record for existence)."""
    model_config = ConfigDict(extra="ignore")

    matriculaId: int | str
    folha: int | str | None = None
    comarca: str | None = None
    endereco: str | None = None
    metragem: Number | None = None
    proprietario: str | None = None
    tipo: str | None = None
    isRegular: bool | None = None
    matriculaOrigem: int | str | None = None
    blockchainTxHash: str | None = None
    createdAt: str | None = None
    updatedAt: str | None = None


class ChainPropertyRecord(BaseModel):
    """Property as read from the ledger by the Offchain API."""
    model_config = ConfigDict(extra="ignore")

    ownerWallet: str | None = None
    tokenId: int | str | None = None
    txHash: str | None = None
    status: str | None = None
    isFrozen: bool | None = None


class PropertySummary(BaseModel):
    """Client-facing property with translated field names."""
    matriculaId: int | str
    folha: int | str | None
    comarca: str | None
    endereco: str | None
    metragem: Number | None
    matriculaOrigem: int | str | None
    ownerWalletAddress: str | None
    propertyType: str | None
    regularStatus: str
    blockchainTxHash: str | None
    createdAt: str | None
    updatedAt: str | None
    blockchain: ChainPropertyRecord | None


class PropertyDbData(BaseModel):
    matriculaId: int | str
    folha: int | str | None
    comarca: str | None
    endereco: str | None
    metragem: Number | None
    proprietario: str | None
    tipo: str | None
    isRegular: bool | None
    matriculaOrigem: int | str | None
    registrationDate: str


class PropertyBlockchainData(BaseModel):
    ownerWallet: str | None
    tokenId: int | str
    txHash: str | None
    status: str
    isFrozen: bool


class PropertyFull(BaseModel):
    """DB metadata plus ledger state for one matrícula."""
    dbData: PropertyDbData
    blockchainData: PropertyBlockchainData


class Pagination(BaseModel):
    page: int
    pageSize: int
    total: int
    totalPages: int


class PropertySearchPage(BaseModel):
    query: str | None
    type: str | None
    data: list[PropertySummary]
    pagination: Pagination
