from timeboard.models.client import Client
from timeboard.models.org import Org
from timeboard.models.project import Project
from timeboard.models.task import Task, task_assignees
from timeboard.models.timesheet_entry import TimesheetEntry
from timeboard.models.user import User

__all__ = ["Org", "User", "Client", "Project", "Task", "task_assignees", "TimesheetEntry"]
