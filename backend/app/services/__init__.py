"""
Services Layer

Ledger logic for users and workout sessions that:
- Accepts domain inputs (caller identity, ids, a database session)
- Returns either a domain model or a tagged error from app.services.errors
- Does NOT depend on HTTP request/response objects
- Commits each mutation as one unit under the ledger lock
"""
