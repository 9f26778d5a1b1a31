"""Infrastructure Layer — database session management and logging setup.

Invariants:
    - Infrastructure holds no business rules
    - Driver exceptions mapped to core/errors.py types before leaving this layer
"""
