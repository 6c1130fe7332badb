"""Erreurs métier du ledger, converties en réponses HTTP par l'API."""

from typing import Any, Dict, Optional


class LedgerError(Exception):
    """Erreur qui correspond à un payload d'erreur stable côté API."""

    code = "LEDGER_ERROR"
    status_code = 400

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidArgumentError(LedgerError):
    code = "INVALID_ARGUMENT"
    status_code = 400


class NotFoundError(LedgerError):
    code = "NOT_FOUND"
    status_code = 404


class ConflictError(LedgerError):
    code = "CONFLICT"
    status_code = 409


class StorageFailureError(LedgerError):
    """Échec de la couche de persistance; la transaction a été annulée."""

    code = "STORAGE_FAILURE"
    status_code = 500
