"""Document id validation for store paths.

Shared by every document store so that a user id that cannot form a
parent path (users/{user_id}) is rejected the same way everywhere.
"""

# Firestore limit for a document id, in UTF-8 bytes.
DOCUMENT_ID_MAX_BYTES = 1500


def validate_document_id(document_id: str) -> None:
    """Raise ValueError if document_id cannot be used as a single path segment."""
    if not document_id or not document_id.strip():
        raise ValueError("document id must be a non-empty string")
    if "/" in document_id:
        raise ValueError(f"document id must not contain '/': {document_id!r}")
    if document_id in (".", "..") or (
        document_id.startswith("__") and document_id.endswith("__")
    ):
        raise ValueError(f"document id is reserved: {document_id!r}")
    if len(document_id.encode("utf-8")) > DOCUMENT_ID_MAX_BYTES:
        raise ValueError(f"document id exceeds {DOCUMENT_ID_MAX_BYTES} bytes")
