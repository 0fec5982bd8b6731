"""Infrastructure Layer — cross-cutting process concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic
"""
