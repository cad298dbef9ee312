from hrms.models.org import Employee
from hrms.models.projects import Project, ProjectTeamMember
from hrms.models.work import Task, TaskComment

__all__ = [
    "Employee",
    "Project",
    "ProjectTeamMember",
    "Task",
    "TaskComment",
]
