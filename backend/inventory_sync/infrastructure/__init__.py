"""Infrastructure Layer — store adapters, external clients, and cross-cutting concerns.

Invariants:
    - Adapters implement core protocols; core never imports from here
    - All backend failures mapped to typed errors from core/errors.py

Design Decisions:
    - One adapter per backend: SQL (production) and in-memory (tests, local runs)
"""
