"""
Repository Module

Persistence boundary for the engine:
- Base repository interface (base.py)
- Factory for getting the configured repository (factory.py)
- In-memory implementation (memory.py)
"""
