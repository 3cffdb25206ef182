"""
StudentInfo API — Student Service (Data Access)
================================================

What:  Every statement the API issues against the `studentinfo` table.
How:   Statements are built with SQLAlchemy constructs, so all values travel
       as bound parameters. Each method runs exactly one statement on the
       session it is given and returns plain results: rows, None, or a
       rows-affected count.
Who:   Called by the route handlers in studentinfo/routes/students.py.

Error Handling:
    Any failure raised while executing a statement is logged and re-raised
    as DatabaseError. Deciding what "not found" means is left to the caller,
    which sees None or a zero rows-affected count.

Queries:
    list:    SELECT ... FROM studentinfo ORDER BY id LIMIT :limit OFFSET :offset
    insert:  INSERT INTO studentinfo (name, class, age) VALUES (...)
    get:     SELECT ... FROM studentinfo WHERE id = :id
    update:  UPDATE studentinfo SET name=:name, class=:class, is_active=:flag,
             updated_at=now() WHERE id = :id
    delete:  DELETE FROM studentinfo WHERE id = :id
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from studentinfo.exceptions import DatabaseError
from studentinfo.models.student import Student
from studentinfo.schemas.student import StudentResponse

logger = logging.getLogger(__name__)


def _describe(exc: Exception) -> str:
    return f"{type(exc).__name__}: {exc}"


class StudentService:
    """
    Stateless data-access object for student rows.

    The session is passed into every call, so one instance can serve all
    concurrent requests.
    """

    async def list_students(
        self,
        db: AsyncSession,
        limit: int,
        offset: int,
    ) -> List[Student]:
        """
        Return at most `limit` students in ascending id order, skipping `offset`.

        An empty page is an empty list, not an error.

        Raises:
            DatabaseError: message is "Database error: <details>"
        """
        try:
            result = await db.execute(
                select(Student).order_by(Student.id).limit(limit).offset(offset)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing students: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=f"Database error: {e}",
                context={"error_type": type(e).__name__, "limit": limit, "offset": offset},
            )

    async def insert_student(
        self,
        db: AsyncSession,
        name: str,
        class_: str,
        age: int,
    ) -> None:
        """
        Insert a new student.

        is_active and both timestamps are left to their storage defaults.
        The generated id is not read back.
        """
        try:
            db.add(Student(name=name, class_=class_, age=age))
            await db.flush()
            logger.info("Student inserted: name=%s class=%s", name, class_)
        except Exception as e:
            logger.error("Database error inserting student: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=_describe(e),
                context={"error_type": type(e).__name__},
            )

    async def get_student_by_id(
        self,
        db: AsyncSession,
        student_id: int,
    ) -> Optional[Student]:
        """Fetch one student, or None when no row has this id."""
        try:
            result = await db.execute(
                select(Student).where(Student.id == student_id)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching student %s: %s", student_id, str(e))
            raise DatabaseError(
                message=_describe(e),
                context={"error_type": type(e).__name__, "student_id": student_id},
            )

    async def update_student(
        self,
        db: AsyncSession,
        student_id: int,
        name: str,
        class_: str,
        is_active: bool,
    ) -> int:
        """
        Overwrite name, class and is_active for one student.

        updated_at is refreshed by the column's onupdate default.

        Returns:
            Number of rows affected (0 when the id no longer exists)
        """
        try:
            result = await db.execute(
                update(Student)
                .where(Student.id == student_id)
                .values({
                    Student.name: name,
                    Student.class_: class_,
                    Student.is_active: 1 if is_active else 0,
                })
                .execution_options(synchronize_session=False)
            )
            return result.rowcount
        except Exception as e:
            logger.error("Database error updating student %s: %s", student_id, str(e))
            raise DatabaseError(
                message=_describe(e),
                context={"error_type": type(e).__name__, "student_id": student_id},
            )

    async def delete_student(self, db: AsyncSession, student_id: int) -> int:
        """Delete one student. Returns the number of rows affected."""
        try:
            result = await db.execute(
                delete(Student)
                .where(Student.id == student_id)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount
        except Exception as e:
            logger.error("Database error deleting student %s: %s", student_id, str(e))
            raise DatabaseError(
                message=_describe(e),
                context={"error_type": type(e).__name__, "student_id": student_id},
            )


def to_student_response(student: Student) -> StudentResponse:
    """
    Convert a storage row into its wire representation.

    Only rows read back from storage may be converted; a row without
    timestamps is a programming error and raises ValueError.
    """
    if student.created_at is None or student.updated_at is None:
        raise ValueError(
            f"Student {student.id} has no timestamps; only persisted rows can be serialized"
        )
    return StudentResponse(
        id=student.id,
        name=student.name,
        class_=student.class_,
        is_active=student.is_active != 0,
        created_at=student.created_at,
        updated_at=student.updated_at,
        age=student.age,
    )


# Stateless, shared by all requests
student_service = StudentService()
