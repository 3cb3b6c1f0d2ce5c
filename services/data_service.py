"""Export and import the whole transaction collection as JSON."""
from datetime import datetime

from database.codec import decode_transactions, encode_transactions
from services.errors import DecodeError
from services.transaction_service import TransactionService
from utils.constants import EXPORT_VERSION
from utils.logging_setup import get_logger

logger = get_logger("money_tracker.data")

IMPORT_MODES = ("merge", "replace")


class DataService:
    def __init__(self, tx_service: TransactionService):
        self._tx_svc = tx_service

    # ── Export ────────────────────────────────────────────────────────────────

    def export_json(self) -> dict:
        """Return a full export dict (caller writes to disk)."""
        return {
            "export_version": EXPORT_VERSION,
            "exported_at": datetime.now().isoformat(),
            "transactions": encode_transactions(self._tx_svc.all()),
        }

    # ── Import ────────────────────────────────────────────────────────────────

    def import_json(self, data: dict, mode: str) -> dict:
        """Import from a previously exported JSON dict.

        mode: 'merge' adds records whose id is not stored yet,
              'replace' swaps the whole collection.
        Raises DecodeError when the payload is malformed; nothing is changed
        in that case.
        """
        if mode not in IMPORT_MODES:
            raise ValueError(f"Invalid import mode: {mode}")
        if not isinstance(data, dict):
            raise DecodeError("Import file must contain a JSON object.")
        version = data.get("export_version", EXPORT_VERSION)
        if not isinstance(version, int) or version > EXPORT_VERSION:
            raise DecodeError(f"Unsupported export version: {version!r}")

        incoming = decode_transactions(data.get("transactions", []))

        if mode == "replace":
            self._tx_svc.replace_all(incoming)
            stats = {"added": len(incoming), "skipped": 0}
        else:
            known = {t.id for t in self._tx_svc.all()}
            fresh = []
            for tx in incoming:
                if tx.id in known:
                    continue
                known.add(tx.id)
                fresh.append(tx)
            if fresh:
                self._tx_svc.replace_all([*self._tx_svc.all(), *fresh])
            stats = {"added": len(fresh), "skipped": len(incoming) - len(fresh)}

        logger.info("Imported transactions (%s): %s", mode, stats)
        return stats
