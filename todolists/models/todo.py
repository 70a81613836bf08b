from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, UniqueConstraint, false
from todolists.database import Base

class TodoList(Base):
    __tablename__ = "todolists"
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    username = Column(String(255), nullable=False, index=True)

    # List titles are unique per owner, not across all users
    __table_args__ = (
        UniqueConstraint("username", "title", name="uix_todolists_username_title"),
    )

class Todo(Base):
    __tablename__ = "todos"
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    done = Column(Boolean, nullable=False, default=False, server_default=false())
    username = Column(String(255), nullable=False, index=True)
    todolist_id = Column(
        Integer,
        ForeignKey("todolists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
