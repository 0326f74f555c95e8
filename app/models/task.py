# app/models/task.py
from sqlalchemy import Column, Integer, String, Text, DateTime, func
from app.database import Base

TASK_STATUS_NEW = "new"

class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    # Refers to users.id, but without a FK constraint: deleting a user
    # leaves its tasks in place.
    user_id = Column(Integer, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String, nullable=False, default=TASK_STATUS_NEW)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
