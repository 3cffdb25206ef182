"""
StudentInfo API — Student SQLAlchemy Model
===========================================

What:  ORM model representing the `studentinfo` table.
Who:   Used by StudentService for CRUD statements and by Alembic and the
       test suite for schema management.

Column notes:
    - id:          autoincrement integer, assigned by storage, never updated
    - class:       stored under the column name `class`; exposed in Python
                   as `class_` since `class` is a keyword
    - is_active:   small integer flag (0/1), storage default 0
    - created_at:  set by storage on insert
    - updated_at:  set by storage on insert and refreshed on every update
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, SmallInteger, String, func, text
from sqlalchemy.orm import Mapped, mapped_column

from studentinfo.database import Base


class Student(Base):
    """
    A student row.

    Lifecycle:
        1. Inserted by POST /api/addstudent (is_active = 0, timestamps = now)
        2. Read by GET /api/studentlist and GET /api/getbyid/{id}
        3. name, class and is_active changed by PATCH /api/update/{id}
        4. Removed by DELETE /api/delete/{id} (hard delete)

    created_at / updated_at are None only on instances that have not been
    flushed and reloaded yet.
    """

    __tablename__ = "studentinfo"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    class_: Mapped[str] = mapped_column("class", String(100), nullable=False)

    is_active: Mapped[int] = mapped_column(
        SmallInteger,
        nullable=False,
        server_default=text("0"),
    )

    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        server_default=func.now(),
    )

    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        server_default=func.now(),
        onupdate=func.now(),
    )

    age: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Student(id={self.id}, name='{self.name}', "
            f"class='{self.class_}', is_active={self.is_active})>"
        )
