"""
tests/test_scheme_import_router.py

HTTP contract of POST /schemes/bulk-import with in-memory collaborators.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.routers.scheme_import import get_audit_sink, get_scheme_store, router
from app.config import AuthSettings, get_auth_settings
from app.domain.scheme_import import REQUIRED_COLUMNS
from app.services.scheme_import_service import SchemeImportService, get_scheme_import_service
from tests.fakes import (
    DEPARTMENT_ID,
    FakeAuditSink,
    FakeSchemeStore,
    build_csv,
    build_workbook,
    replace_workbook_member,
    scheme_row,
)

SECRET = "test-secret"
XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _token(role: str = "ADMIN", expires_in: timedelta = timedelta(hours=2)) -> str:
    payload = {
        "user": {"id": "admin-1", "role": role, "name": "Admin"},
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, SECRET, algorithm="HS256")


@pytest.fixture()
def client(store: FakeSchemeStore, audit_sink: FakeAuditSink) -> TestClient:
    application = FastAPI()
    application.include_router(router)
    application.dependency_overrides[get_auth_settings] = lambda: AuthSettings(jwt_secret=SECRET)
    application.dependency_overrides[get_scheme_store] = lambda: store
    application.dependency_overrides[get_audit_sink] = lambda: audit_sink
    application.dependency_overrides[get_scheme_import_service] = lambda: SchemeImportService()
    return TestClient(application)


def _upload(client: TestClient, content: bytes, *, filename: str = "schemes.csv", data: dict | None = None):
    return client.post(
        "/schemes/bulk-import",
        files={"file": (filename, content, "text/csv")},
        data=data or {},
    )


def test_successful_import_returns_summary(
    client: TestClient, store: FakeSchemeStore, audit_sink: FakeAuditSink
) -> None:
    store.seed("0000000000001")
    untouched = store.seed("0000000000003", scheme_name="Rural Roads")
    client.cookies.set("session", _token())
    content = build_csv([scheme_row("1"), scheme_row("2"), scheme_row("3", name="")])

    response = _upload(client, content, data={"deptId": DEPARTMENT_ID})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "successCount": 2,
        "errorCount": 1,
        "errors": ["Row 4: scheme_name: Name is required"],
        "truncated": False,
    }
    assert audit_sink.entries[0][0] == "admin-1"
    assert untouched.fields == {"scheme_code": "0000000000003", "scheme_name": "Rural Roads"}


def test_all_rows_failing_is_still_a_success_response(client: TestClient) -> None:
    client.cookies.set("session", _token())
    content = build_csv([scheme_row("1"), scheme_row("2")])

    response = _upload(client, content)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["successCount"] == 0
    assert body["errorCount"] == 2


@pytest.mark.parametrize(
    "token",
    [
        None,
        "not-a-jwt",
        _token(role="VIEWER"),
        _token(expires_in=timedelta(seconds=-5)),
    ],
)
def test_unauthorized_callers_are_rejected_before_decoding(
    client: TestClient, store: FakeSchemeStore, token: str | None
) -> None:
    if token is not None:
        client.cookies.set("session", token)

    response = _upload(client, build_csv([scheme_row("1")]))

    assert response.status_code == 401
    assert store.calls == []


def test_missing_column_is_a_batch_error(client: TestClient, store: FakeSchemeStore) -> None:
    client.cookies.set("session", _token())
    columns = [column for column in REQUIRED_COLUMNS if column != "percent_actual_expenditure"]

    response = _upload(client, build_csv([scheme_row("1")], columns=columns))

    assert response.status_code == 400
    assert response.json() == {"detail": "Missing required column: percent_actual_expenditure"}
    assert store.calls == []


def test_empty_file_is_a_batch_error(client: TestClient) -> None:
    client.cookies.set("session", _token())

    response = _upload(client, b"")

    assert response.status_code == 400
    assert response.json() == {"detail": "File is empty"}


def test_corrupt_workbook_is_a_batch_error(client: TestClient, store: FakeSchemeStore) -> None:
    client.cookies.set("session", _token())
    valid = build_workbook([list(REQUIRED_COLUMNS), [1, "Rural Roads", 1, 1, 1, 1, 1, 1]])
    content = replace_workbook_member(valid, "xl/worksheets/sheet1.xml", b"<worksheet><sheetData><row><c>")

    response = client.post(
        "/schemes/bulk-import",
        files={"file": ("schemes.xlsx", content, XLSX_CONTENT_TYPE)},
        data={"deptId": DEPARTMENT_ID},
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "File could not be read as a spreadsheet."}
    assert store.calls == []


def test_unsupported_upload_type_is_rejected(client: TestClient) -> None:
    client.cookies.set("session", _token())

    response = client.post(
        "/schemes/bulk-import",
        files={"file": ("notes.pdf", b"%PDF-1.4", "application/pdf")},
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "Only CSV or Excel files are allowed."}


def test_missing_file_is_rejected(client: TestClient) -> None:
    client.cookies.set("session", _token())

    response = client.post("/schemes/bulk-import", data={"deptId": DEPARTMENT_ID})

    assert response.status_code == 400
    assert response.json() == {"detail": "No file uploaded"}
