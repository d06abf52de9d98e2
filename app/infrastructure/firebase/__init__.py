"""Firestore integration (REST client, document store, collection names)."""

from app.infrastructure.firebase.client import create_firestore_client
from app.infrastructure.firebase.document_store import FirestoreDocumentStore

__all__ = [
    "FirestoreDocumentStore",
    "create_firestore_client",
]
