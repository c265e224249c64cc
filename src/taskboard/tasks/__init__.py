"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskPatch) and id generation
- task_sources.py: TaskSource implementations (demo, HTTP)
"""
