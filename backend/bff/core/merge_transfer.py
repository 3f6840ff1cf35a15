"""Transfer Merge — pure DB + ledger transfer status merge and transfer filters.

Invariants:
    - All functions are PURE: no IO, no async
    - Ledger status/approvals win whenever the ledger reports them (authoritative state)
    - DB values are the fallback; approvals default to [] and buyerAccepted to False
    - Transfer lists from upstreams may hold non-object items; filters skip them
"""

from collections.abc import Iterable

from bff.core.domain_types import FINAL_TRANSFER_STATUSES
from bff.schemas.transfer import (
    ChainTransferRecord,
    TransferRecord,
    TransferStatusView,
)


def merge_transfer_status(
    transfer_id: str,
    db: TransferRecord,
    chain: ChainTransferRecord | None,
) -> TransferStatusView:
    """DB bookkeeping enriched with ledger state."""
    status = db.status
    approvals = db.approvals or []
    buyer_accepted = False
    if chain is not None:
        status = chain.status or status
        if chain.approvals is not None:
            approvals = chain.approvals
        buyer_accepted = bool(chain.buyerAccepted)
    return TransferStatusView(
        transferId=db.transferId if db.transferId is not None else transfer_id,
        matriculaId=db.matriculaId,
        seller=db.seller,
        buyer=db.buyer,
        status=status,
        approvals=approvals,
        buyerAccepted=buyer_accepted,
        createdAt=db.createdAt,
    )


def filter_by_matricula(
    transfers: Iterable[dict], matricula_ids: Iterable[int | str],
) -> list[dict]:
    """Transfers whose matriculaId is one of matricula_ids (compared as strings)."""
    wanted = {str(m) for m in matricula_ids}
    return [
        t for t in transfers
        if isinstance(t, dict)
        and t.get("matriculaId") is not None
        and str(t["matriculaId"]) in wanted
    ]


def is_pending(transfer: dict) -> bool:
    """A transfer is pending until it reaches a final status."""
    status = transfer.get("status")
    if not isinstance(status, str):
        return True
    return status.upper() not in FINAL_TRANSFER_STATUSES
