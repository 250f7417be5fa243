"""
Document store layer.

Responsibilities:
- Define the collection/document interface the services talk to.
- Back it with Firestore when Firebase Admin is configured.
- Fall back to a seeded in-memory store for local runs and tests.
"""
