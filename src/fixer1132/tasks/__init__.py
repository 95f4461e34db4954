"""
Task subsystem.

Components:
- task_models.py: data structures (ProcessResult, TaskOutcome, errors)
- launcher.py: OS process-launch facility (subprocess)
- steps.py: step kinds (plain command, admin-elevated script)
- task_runner.py: single-flight runner + activity log
"""
