"""
Catalog seeding package.

Responsibilities:
- Load sample product files shipped with the package.
- Normalize them into the stored Product shape.
- Write them into a document store (Firestore or the in-memory fallback).
"""
