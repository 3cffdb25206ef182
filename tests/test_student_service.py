"""
StudentInfo API — Student Service Unit Tests
=============================================

What:  Tests for StudentService and to_student_response against a mocked session.
How:   No database: the session's execute/flush are AsyncMocks.

What we test:
    ✅ Each statement returns rows / None / rows-affected as documented
    ✅ Driver failures become DatabaseError with the expected message
    ✅ Storage rows map to the wire shape (0/1 flag → bool)
    ✅ Rows without timestamps cannot be serialized
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from studentinfo.exceptions import DatabaseError
from studentinfo.models.student import Student
from studentinfo.services.student_service import StudentService, to_student_response


class TestListStudents:

    def setup_method(self):
        self.service = StudentService()

    @pytest.mark.asyncio
    async def test_returns_rows(self, mock_db_session, sample_student):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [sample_student]
        mock_db_session.execute.return_value = mock_result

        rows = await self.service.list_students(mock_db_session, limit=10, offset=0)

        assert rows == [sample_student]
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_page_is_empty_list(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await self.service.list_students(mock_db_session, limit=10, offset=50) == []

    @pytest.mark.asyncio
    async def test_statement_orders_by_id_with_limit_and_offset(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        await self.service.list_students(mock_db_session, limit=2, offset=2)

        stmt = mock_db_session.execute.await_args.args[0]
        sql = str(stmt)
        assert "ORDER BY studentinfo.id" in sql
        assert "LIMIT" in sql and "OFFSET" in sql
        compiled = stmt.compile()
        assert 2 in compiled.params.values()

    @pytest.mark.asyncio
    async def test_error_message_prefixed(self, mock_db_session):
        mock_db_session.execute.side_effect = SQLAlchemyError("connection lost")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_students(mock_db_session, limit=10, offset=0)

        assert exc_info.value.message.startswith("Database error: ")
        assert "connection lost" in exc_info.value.message


class TestInsertStudent:

    def setup_method(self):
        self.service = StudentService()

    @pytest.mark.asyncio
    async def test_adds_row_with_storage_defaults(self, mock_db_session):
        await self.service.insert_student(mock_db_session, name="Ann", class_="5A", age=10)

        mock_db_session.add.assert_called_once()
        student = mock_db_session.add.call_args.args[0]
        assert isinstance(student, Student)
        assert (student.name, student.class_, student.age) == ("Ann", "5A", 10)
        # Left to the server defaults
        assert student.is_active is None
        assert student.created_at is None
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_flush_failure_raises_database_error(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk full"))
        )

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.insert_student(mock_db_session, name="Ann", class_="5A", age=10)

        assert "OperationalError" in exc_info.value.message


class TestGetStudentById:

    def setup_method(self):
        self.service = StudentService()

    @pytest.mark.asyncio
    async def test_found(self, mock_db_session, sample_student):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = sample_student
        mock_db_session.execute.return_value = mock_result

        assert await self.service.get_student_by_id(mock_db_session, 7) is sample_student

    @pytest.mark.asyncio
    async def test_not_found_returns_none(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        assert await self.service.get_student_by_id(mock_db_session, 999) is None

    @pytest.mark.asyncio
    async def test_error_carries_student_id(self, mock_db_session):
        mock_db_session.execute.side_effect = SQLAlchemyError("boom")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.get_student_by_id(mock_db_session, 3)

        assert exc_info.value.context["student_id"] == 3


class TestUpdateAndDelete:

    def setup_method(self):
        self.service = StudentService()

    @pytest.mark.asyncio
    async def test_update_returns_rows_affected(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.rowcount = 1
        mock_db_session.execute.return_value = mock_result

        affected = await self.service.update_student(
            mock_db_session, 7, name="Ann B", class_="5B", is_active=True
        )

        assert affected == 1
        stmt = mock_db_session.execute.await_args.args[0]
        params = stmt.compile().params
        values = list(params.values())
        assert "Ann B" in values
        assert "5B" in values
        assert params["is_active"] == 1

    @pytest.mark.asyncio
    async def test_update_inactive_flag_is_zero(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.rowcount = 1
        mock_db_session.execute.return_value = mock_result

        await self.service.update_student(
            mock_db_session, 7, name="Ann", class_="5A", is_active=False
        )

        params = mock_db_session.execute.await_args.args[0].compile().params
        assert params["is_active"] == 0

    @pytest.mark.asyncio
    async def test_delete_missing_row_returns_zero(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.rowcount = 0
        mock_db_session.execute.return_value = mock_result

        assert await self.service.delete_student(mock_db_session, 999) == 0

    @pytest.mark.asyncio
    async def test_delete_error(self, mock_db_session):
        mock_db_session.execute.side_effect = SQLAlchemyError("locked")

        with pytest.raises(DatabaseError):
            await self.service.delete_student(mock_db_session, 1)


class TestToStudentResponse:

    def test_inactive_flag_maps_to_false(self, sample_student):
        response = to_student_response(sample_student)

        assert response.is_active is False
        assert response.id == 7
        assert response.class_ == "5A"

    def test_any_non_zero_flag_is_active(self, sample_student):
        sample_student.is_active = 2
        assert to_student_response(sample_student).is_active is True

    def test_serializes_class_under_its_json_name(self, sample_student):
        dumped = to_student_response(sample_student).model_dump(by_alias=True)

        assert dumped["class"] == "5A"
        assert "class_" not in dumped

    def test_missing_timestamps_rejected(self):
        unsaved = Student(id=1, name="Ann", class_="5A", is_active=0, age=10)

        with pytest.raises(ValueError, match="no timestamps"):
            to_student_response(unsaved)

    def test_missing_updated_at_rejected(self):
        row = Student(
            id=1, name="Ann", class_="5A", is_active=0, age=10,
            created_at=datetime.now(timezone.utc),
        )

        with pytest.raises(ValueError):
            to_student_response(row)
