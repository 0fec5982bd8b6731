"""Core Layer — marketplace domain logic: records, stores, transition rules.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - Transition rules (booking_lifecycle, enforce_approval) are pure and deterministic
    - Stores hold state in memory only; nothing survives a restart

Design Decisions:
    - Functional core separated from imperative shell: FastAPI routes only translate
"""
