"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskView) and outcome enums
- task_heap.py: the priority container (array-backed binary min-heap)
- task_csv.py: "Task,Priority" file load/save
- errors.py: fatal errors (storage exhaustion)
"""
