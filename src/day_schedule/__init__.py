"""
Single-day interval planner.

Components:
- schedule/task_models.py: Task, Priority and HH:MM helpers
- schedule/task_factory.py: validated Task construction from user input
- schedule/task_store.py: JSON file storage with atomic writes
- schedule/scheduler.py: IntervalScheduler, the no-overlap ordered schedule
- cli/: console front end (commands, bootstrap, entry point)
"""
