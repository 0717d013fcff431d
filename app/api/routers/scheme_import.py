"""
app/api/routers/scheme_import.py

Scheme bulk import HTTP endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.api.dependencies import SessionUser, get_current_admin, get_import_upload
from app.domain.import_errors import SchemeImportError
from app.repositories.audit_log_repository import AuditLogRepository
from app.repositories.scheme_repository import SchemeRepository
from app.schemas.scheme_import import SchemeImportSummaryResponse
from app.services.batch_reporter import AuditSink
from app.services.reconciliation_engine import RecordStore
from app.services.scheme_import_service import SchemeImportService, get_scheme_import_service
from db.session import get_db

router = APIRouter(prefix="/schemes", tags=["schemes"])


def get_scheme_store(db: Session = Depends(get_db)) -> RecordStore:
    return SchemeRepository(db)


def get_audit_sink(db: Session = Depends(get_db)) -> AuditSink:
    return AuditLogRepository(db)


@router.post("/bulk-import", response_model=SchemeImportSummaryResponse)
def bulk_import_schemes(
    user: SessionUser = Depends(get_current_admin),
    file: UploadFile = Depends(get_import_upload),
    department_id: str | None = Form(
        default=None,
        alias="deptId",
        description="Department attached to schemes created by this import",
    ),
    store: RecordStore = Depends(get_scheme_store),
    audit_sink: AuditSink = Depends(get_audit_sink),
    import_service: SchemeImportService = Depends(get_scheme_import_service),
) -> SchemeImportSummaryResponse:
    """
    Create or update schemes from one uploaded CSV or Excel file.

    Row-level problems are reported in the 200 response; only file-level
    problems (empty file, missing column, unreadable bytes) return 400.
    """

    try:
        summary = import_service.import_file(
            content=file.file.read(),
            filename=file.filename,
            actor_id=user.id,
            store=store,
            audit_sink=audit_sink,
            grouping_key_id=department_id,
        )
    except SchemeImportError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        file.file.close()

    return SchemeImportSummaryResponse.from_summary(summary)
