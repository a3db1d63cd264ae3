"""
Typed errors raised by the document-entry services.

    AppError (base)
    |
    +-- DocumentError
        +-- DocumentValidationError   400  required field absent or malformed
        +-- DocumentReferenceError    422  a referenced product does not exist
        +-- DocumentPersistenceError  500  the store rejected the unit of work

Each class carries a machine readable ``kind`` and the HTTP status the API
layer renders it with (see ``app.main``). Callers catch by type, never by
message text.
"""
from typing import Iterable, List, Optional


class AppError(Exception):
    """Base class for all application errors."""

    kind: str = "error"
    status_code: int = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_dict(self) -> dict:
        body = {"message": self.message, "kind": self.kind}
        if self.error is not None:
            body["error"] = self.error
        return body


class DocumentError(AppError):
    """Base class for sales / purchase document entry failures."""
    pass


class DocumentValidationError(DocumentError):
    """Required header fields are missing or malformed. Nothing was persisted."""

    kind = "validation"
    status_code = 400

    def __init__(self, missing: Iterable[str] = (), malformed: Iterable[str] = ()):
        self.missing: List[str] = list(missing)
        self.malformed: List[str] = list(malformed)
        parts = []
        if self.missing:
            parts.append(f"missing: {', '.join(self.missing)}")
        if self.malformed:
            parts.append(f"malformed: {', '.join(self.malformed)}")
        message = "Required fields missing" if self.missing else "Invalid fields"
        super().__init__(message, error="; ".join(parts) or None)

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["missing"] = self.missing
        body["malformed"] = self.malformed
        return body


class DocumentReferenceError(DocumentError):
    """One or more line items reference a product that does not exist."""

    kind = "referential"
    status_code = 422

    def __init__(self, product_ids: Iterable[int]):
        self.product_ids: List[int] = sorted(set(product_ids))
        super().__init__(
            "Unknown product reference",
            error=f"products not found: {', '.join(str(p) for p in self.product_ids)}",
        )

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["product_ids"] = self.product_ids
        return body


class DocumentPersistenceError(DocumentError):
    """The store failed part-way through; the whole unit of work was rolled back."""

    kind = "persistence"
    status_code = 500
