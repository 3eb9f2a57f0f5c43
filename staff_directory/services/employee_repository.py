# services/employee_repository.py
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from staff_directory.errors import DuplicateEmail, NotFound, ValidationError
from staff_directory.models import Employee, utcnow
from staff_directory.validation import EmployeeCreate, EmployeeUpdate


UNIQUE_SQLSTATE = "23505"
CHECK_SQLSTATE = "23514"


def _sqlstate(orig):
    # psycopg2 exposes pgcode, psycopg 3 sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if _sqlstate(orig) == UNIQUE_SQLSTATE:
        return True
    if getattr(orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_UNIQUE":
        return True
    # sqlite before Python 3.11 only reports the failing column
    return "UNIQUE constraint failed: employees.email" in str(orig)


def _is_check_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if _sqlstate(orig) == CHECK_SQLSTATE:
        return True
    if getattr(orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_CHECK":
        return True
    return "check_salary_non_negative" in str(orig)


class EmployeeRepository:
    """
    Employee persistence on top of a SQLAlchemy session.

    Each write commits as a single transaction and rolls back on failure, so a
    rejected create/update/delete leaves the table untouched. Email uniqueness
    is left to the ``unique_employee_email`` constraint; there is no
    look-before-insert.
    """

    def __init__(self, session):
        self._session = session

    def list(self):
        stmt = select(Employee).order_by(Employee.created_at, Employee.id)
        return list(self._session.scalars(stmt))

    def get(self, employee_id) -> Employee:
        key = self._parse_id(employee_id)
        employee = self._session.get(Employee, key)
        if employee is None:
            raise NotFound()
        return employee

    def create(self, payload: EmployeeCreate) -> Employee:
        try:
            employee = Employee(**payload.as_dict())
            self._session.add(employee)
            self._session.commit()
        except ValidationError:
            self._session.rollback()
            raise
        except IntegrityError as exc:
            self._session.rollback()
            raise self._translate(exc)
        return employee

    def update(self, employee_id, payload: EmployeeUpdate) -> Employee:
        employee = self.get(employee_id)
        try:
            for field, value in payload.changes().items():
                setattr(employee, field, value)
            employee.updated_at = utcnow()
            self._session.commit()
        except ValidationError:
            self._session.rollback()
            raise
        except IntegrityError as exc:
            self._session.rollback()
            raise self._translate(exc)
        return employee

    def delete(self, employee_id) -> None:
        employee = self.get(employee_id)
        try:
            self._session.delete(employee)
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise

    @staticmethod
    def _parse_id(employee_id) -> uuid.UUID:
        if isinstance(employee_id, uuid.UUID):
            return employee_id
        try:
            return uuid.UUID(str(employee_id))
        except ValueError:
            # a malformed id names no record
            raise NotFound() from None

    @staticmethod
    def _translate(exc: IntegrityError) -> Exception:
        if _is_unique_violation(exc):
            return DuplicateEmail()
        if _is_check_violation(exc):
            return ValidationError({"salary": "salary must be a non-negative number"})
        return exc
