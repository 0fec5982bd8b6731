"""Services Layer — orchestration across core stores.

Invariants:
    - Services compose core stores; transition rules stay in core/

Design Decisions:
    - Multi-store commands (sign-up, booking for the current user) live here,
      so no core store depends on another store it does not write to
"""
