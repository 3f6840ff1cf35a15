"""Transfer Schemas — DB/ledger transfer records, approvers, and the merged status view.

Invariants:
    - TransferStatusView.approvals is never null (empty list when no source has any)
    - ApproverRecord.active defaults to True: registries that omit the flag list active approvers
"""

from pydantic import BaseModel, ConfigDict, Field


class ApprovalEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    entity: str | None = None
    approved: bool = False
    timestamp: str | None = None


class TransferRecord(BaseModel):
    """Transfer bookkeeping as recorded by the Orchestrator."""
    model_config = ConfigDict(extra="ignore")

    transferId: int | str | None = None
    matriculaId: int | str | None = None
    seller: str | None = None
    buyer: str | None = None
    status: str | None = None
    approvals: list[ApprovalEntry] | None = None
    createdAt: str | None = None


class ChainTransferRecord(BaseModel):
    """Transfer state as read from the ledger (authoritative for status/approvals)."""
    model_config = ConfigDict(extra="ignore")

    status: str | None = None
    approvals: list[ApprovalEntry] | None = None
    buyerAccepted: bool | None = None


class TransferStatusView(BaseModel):
    transferId: int | str
    matriculaId: int | str | None
    seller: str | None
    buyer: str | None
    status: str | None
    approvals: list[ApprovalEntry]
    buyerAccepted: bool
    createdAt: str | None


class TransferRequest(BaseModel):
    """Initiation body: extra fields are ignored, the on-chain payload is rebuilt."""
    matriculaId: int | str | None = None
    to: str | None = None


class ApproverRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    address: str | None = Field(None, alias="walletAddress")
    active: bool = True
