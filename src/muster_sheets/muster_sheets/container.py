from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .receipts.digests.base import ReceiptDigest
from .receipts.factory import DigestFactory
from .receipts.service import ReceiptService
from .results.service import ResultsService
from .sheets.mysql_sheet_repository import MySQLSheetRepository
from .sheets.repository import SheetRepository
from .sheets.service import SheetService


@dataclass(frozen=True)
class Container:
    sheets_repo: SheetRepository
    attendance_repo: AttendanceRepository

    sheet_service: SheetService
    receipt_service: ReceiptService
    attendance_service: AttendanceService
    results_service: ResultsService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    sheets_repo: SheetRepository,
    attendance_repo: AttendanceRepository,
    public_base_url: str,
    digest: Optional[ReceiptDigest] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build every service over the given repositories (MySQL in the app, fakes in tests)."""
    sheet_service = SheetService(sheets_repo, attendance_repo, public_base_url=public_base_url)
    receipt_service = ReceiptService(attendance_repo, sheets_repo, digest=digest or DigestFactory().detect())
    attendance_service = AttendanceService(
        attendance_repo,
        sheets_repo,
        receipt_service,
        sheet_service=sheet_service,
    )
    results_service = ResultsService(attendance_repo, sheet_service)

    return Container(
        sheets_repo=sheets_repo,
        attendance_repo=attendance_repo,
        sheet_service=sheet_service,
        receipt_service=receipt_service,
        attendance_service=attendance_service,
        results_service=results_service,
        conn=conn,
    )


def build_container(*, db_config: dict, public_base_url: str = "http://localhost:5000") -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire_services(
        sheets_repo=MySQLSheetRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        public_base_url=public_base_url,
        conn=conn,
    )
