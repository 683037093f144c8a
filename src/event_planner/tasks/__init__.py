"""
Task subsystem.

Components:
- task_models.py: data structures (TaskRecord, TaskFilter, TaskChange)
- task_codec.py: JSON encoding of the task list
- kv_store.py: durable key-value slots (SQLite / in-memory)
- task_persistence.py: load/save of the whole list under one key
- task_store.py: owning collection with write-through persistence
- task_views.py: filtered / date-sorted projections for list screens
- edit_session.py: staged edits and location autofill
"""
