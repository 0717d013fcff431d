from __future__ import annotations

import unittest
import uuid
from decimal import Decimal
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, OperationalError

from app.domain.import_errors import StoreWriteError
from app.repositories.audit_log_repository import AuditLogRepository
from app.repositories.scheme_repository import SchemeRepository
from db.models import AuditLog, Scheme
from tests.fakes import DEPARTMENT_ID

FIELDS = {
    "scheme_code": "0000000000042",
    "scheme_name": "Canal Lining",
    "total_budget_provision": Decimal("10"),
    "progressive_allotment": Decimal("8"),
    "actual_progressive_expenditure": Decimal("4"),
    "pct_budget_expenditure": Decimal("40"),
    "pct_actual_expenditure": Decimal("50"),
    "provisional_expenditure_current_month": Decimal("1"),
}


class TestSchemeRepository(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MagicMock()
        self.repository = SchemeRepository(self.session)

    def test_create_commits_each_row(self) -> None:
        scheme = self.repository.create(FIELDS, DEPARTMENT_ID)

        self.assertIsInstance(scheme, Scheme)
        self.assertEqual(scheme.department_id, uuid.UUID(DEPARTMENT_ID))
        self.session.add.assert_called_once_with(scheme)
        self.session.commit.assert_called_once_with()

    def test_create_rolls_back_and_wraps_integrity_errors(self) -> None:
        self.session.commit.side_effect = IntegrityError(
            "INSERT INTO schemes ...",
            {},
            Exception("duplicate key value violates unique constraint\nDETAIL: ..."),
        )

        with self.assertRaises(StoreWriteError) as ctx:
            self.repository.create(FIELDS, DEPARTMENT_ID)

        self.session.rollback.assert_called_once_with()
        self.assertEqual(
            str(ctx.exception),
            "Failed to create scheme 0000000000042: duplicate key value violates unique constraint",
        )

    def test_create_rejects_malformed_department_id(self) -> None:
        with self.assertRaises(StoreWriteError):
            self.repository.create(FIELDS, "not-a-uuid")

        self.session.add.assert_not_called()

    def test_update_overwrites_every_field(self) -> None:
        scheme = Scheme(**{**FIELDS, "scheme_name": "Old"}, department_id=uuid.UUID(DEPARTMENT_ID))
        self.session.get.return_value = scheme

        self.repository.update(uuid.uuid4(), {"scheme_name": "New", "progressive_allotment": Decimal("0")})

        self.assertEqual(scheme.scheme_name, "New")
        self.assertEqual(scheme.progressive_allotment, Decimal("0"))
        self.session.commit.assert_called_once_with()

    def test_update_of_vanished_record_fails(self) -> None:
        self.session.get.return_value = None

        with self.assertRaises(StoreWriteError):
            self.repository.update(uuid.uuid4(), {"scheme_name": "New"})

    def test_lookup_errors_become_store_errors(self) -> None:
        self.session.scalars.side_effect = OperationalError("SELECT", {}, Exception("server closed the connection"))

        with self.assertRaises(StoreWriteError) as ctx:
            self.repository.find_by_key("0000000000042")

        self.assertIn("server closed the connection", str(ctx.exception))
        self.session.rollback.assert_called_once_with()


class TestAuditLogRepository(unittest.TestCase):
    def test_record_writes_one_entry(self) -> None:
        session = MagicMock()

        AuditLogRepository(session).record("admin-1", "BULK_IMPORT_SCHEMES", {"success_count": 2})

        entry = session.add.call_args.args[0]
        self.assertIsInstance(entry, AuditLog)
        self.assertEqual(entry.user_id, "admin-1")
        self.assertEqual(entry.module, "SCHEMES")
        self.assertEqual(entry.details, {"success_count": 2})
        session.commit.assert_called_once_with()

    def test_record_rolls_back_on_failure(self) -> None:
        session = MagicMock()
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk full"))

        with self.assertRaises(OperationalError):
            AuditLogRepository(session).record("admin-1", "BULK_IMPORT_SCHEMES", {})

        session.rollback.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
