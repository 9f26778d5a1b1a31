"""Services Layer — one service class per resource, plus analytics.

Invariants:
    - Services own validation orchestration: pure rules from core/, DB checks here
    - Every failure leaves as a core/errors.py type (never a raw SQLAlchemy error)
    - Routes stay thin and delegate here

Design Decisions:
    - Service classes constructed per request with the AsyncSession: explicit
      dependencies, no globals
"""
