"""Infrastructure adapters: Firestore, in-memory, Redis, repositories."""
