"""Record on-chain league transactions reported by the client."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from benolo.models import LeagueTransaction

logger = logging.getLogger(__name__)


class TransactionLogError(ValueError):
    pass


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def log_league_transaction(db: Session, payload: dict[str, Any]) -> LeagueTransaction:
    league_id = payload.get("leagueId")
    action = payload.get("action")
    tx_hash = payload.get("txHash")
    if not league_id or not action or not tx_hash:
        raise TransactionLogError("leagueId, action and txHash are required")

    metadata = payload.get("metadata")
    transaction = LeagueTransaction(
        league_id=str(league_id),
        action=str(action),
        tx_hash=str(tx_hash),
        wallet_address=payload.get("walletAddress") or None,
        chain_id=_optional_int(payload.get("chainId")),
        tx_metadata=metadata if isinstance(metadata, dict) else None,
    )
    db.add(transaction)
    db.commit()
    logger.info(
        "Logged transaction league=%s action=%s tx_hash=%s",
        transaction.league_id,
        transaction.action,
        transaction.tx_hash,
    )
    return transaction
