"""
PetSoft Backend — Application Package
=======================================

What:  Pet-boarding records service: accounts, the boarding dashboard and
       hosted payment checkout.

Layers:

    ┌─────────────────────────────────────┐
    │      Routes (HTTP in / HTTP out)    │  ← parse request, map outcome
    ├─────────────────────────────────────┤
    │   Services (actions, guard, cache)  │  ← validate → authorize → mutate
    ├─────────────────────────────────────┤
    │  Validation · Schemas · Results     │  ← pydantic, Ok/Err, ActionError
    ├─────────────────────────────────────┤
    │  Models & Database (persistence)    │  ← async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
