"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent and act as the single source of truth for the "schema".

Layout:
    users/{user_id}                  -> {"tasks": []}
    users/{user_id}/tasks/{task_id}  -> task document
"""

COLLECTION_USERS = "users"
# Subcollection under each user document.
COLLECTION_TASKS = "tasks"
