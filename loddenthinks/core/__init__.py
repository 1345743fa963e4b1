"""Core primitives shared by the rules (identities, typed errors, events).

Kept free of FastAPI and Redis concerns so the rules can be driven by the API,
scripts and tests alike.
"""
