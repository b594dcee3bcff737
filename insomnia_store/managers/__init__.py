"""Data access managers for the store.

Each module provides async functions that encapsulate CRUD operations and
business logic.  Managers accept a ``RecordStore`` as a parameter and raise
domain exceptions (``insomnia_store.errors``), never HTTP exceptions -- that
translation is the router's responsibility.
"""
