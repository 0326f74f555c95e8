from .user import UserRequest, UserCreate, UserUpdate, UserOut
from .task import TaskRequest, TaskUpdateRequest, TaskCreate, TaskUpdate, TaskOut
