"""
Task subsystem.

Components:
- task_models.py: the Task record and the title search predicate
- task_store.py: SQLite-backed storage (fetch / search / create / update / delete)
"""
