"""Property Merge — pure DB + ledger merges and client-facing name translation.

Invariants:
    - All functions are PURE: no IO, no async, no clock (now is injected)
    - A missing ledger record never fails a merge: ledger fields default or go null
    - Field-name translation (proprietario → ownerWalletAddress, tipo → propertyType,
      isRegular → regularStatus) happens only here

Design Decisions:
    - chain: ChainPropertyRecord | None as an explicit branch instead of
      attribute fallbacks sprinkled through route code
"""

from datetime import datetime, timezone

from bff.core.domain_types import ChainPropertyStatus, RegularStatus
from bff.schemas.property import (
    ChainPropertyRecord,
    PropertyBlockchainData,
    PropertyDbData,
    PropertyFull,
    PropertyRecord,
    PropertySummary,
)


def regular_status(is_regular: bool | None) -> RegularStatus:
    return RegularStatus.REGULAR if is_regular else RegularStatus.IRREGULAR


def to_property_summary(
    db: PropertyRecord, chain: ChainPropertyRecord | None,
) -> PropertySummary:
    """DB record with client-facing names, plus the ledger record when available."""
    return PropertySummary(
        matriculaId=db.matriculaId,
        folha=db.folha,
        comarca=db.comarca,
        endereco=db.endereco,
        metragem=db.metragem,
        matriculaOrigem=db.matriculaOrigem,
        ownerWalletAddress=db.proprietario,
        propertyType=db.tipo,
        regularStatus=regular_status(db.isRegular).value,
        blockchainTxHash=db.blockchainTxHash,
        createdAt=db.createdAt,
        updatedAt=db.updatedAt,
        blockchain=chain,
    )


def merge_property_full(
    matricula_id: str,
    db: PropertyRecord,
    chain: ChainPropertyRecord | None,
    now: datetime | None = None,
) -> PropertyFull:
    """Merge DB metadata with ledger state; ledger defaults fill the gaps."""
    registration_date = db.createdAt or (
        now or datetime.now(timezone.utc)
    ).isoformat()
    chain = chain or ChainPropertyRecord()
    return PropertyFull(
        dbData=PropertyDbData(
            matriculaId=db.matriculaId,
            folha=db.folha,
            comarca=db.comarca,
            endereco=db.endereco,
            metragem=db.metragem,
            proprietario=db.proprietario,
            tipo=db.tipo,
            isRegular=db.isRegular,
            matriculaOrigem=db.matriculaOrigem,
            registrationDate=registration_date,
        ),
        blockchainData=PropertyBlockchainData(
            ownerWallet=chain.ownerWallet or db.proprietario,
            tokenId=chain.tokenId if chain.tokenId is not None else matricula_id,
            txHash=chain.txHash,
            status=chain.status or ChainPropertyStatus.PENDING.value,
            isFrozen=bool(chain.isFrozen),
        ),
    )
