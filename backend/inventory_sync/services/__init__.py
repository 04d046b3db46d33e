"""Services Layer — async orchestration of store IO around the pure core.

Invariants:
    - Services talk to stores only through core.repository_protocols.TableStore
    - One module per pipeline stage that touches the store (mutator, sorter) plus the engine

Design Decisions:
    - Engine composes stages explicitly, no plugin registry
"""
