"""Task list and notes kept alongside the focus timer."""

from .notes import NOTES_KEY, NotesPad
from .tasks import TASKS_KEY, Task, TaskList

__all__ = ["NOTES_KEY", "NotesPad", "TASKS_KEY", "Task", "TaskList"]
