from .user import User
from .task import Task, TASK_STATUS_NEW
