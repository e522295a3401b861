from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .academics.mysql_academic_repository import MySQLAcademicRepository
from .academics.repository import AcademicRepository
from .academics.service import AcademicService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_JUSTIFICATION_MAX_FILES, DEFAULT_MAX_FILE_SIZE, DEFAULT_POOL_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .justifications.mysql_justification_repository import MySQLJustificationRepository
from .justifications.repository import JustificationRepository
from .justifications.service import JustificationService
from .legacy.host import LegacyHost
from .legacy.uploader import RemoteImageUploader
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.profile_images import ProfileImageStore
from .students.repository import StudentRepository
from .students.service import AuthService, StudentService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    legacy_host: LegacyHost

    students_repo: StudentRepository
    academics_repo: AcademicRepository
    justifications_repo: JustificationRepository
    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository
    payments_repo: PaymentRepository

    auth_service: AuthService
    student_service: StudentService
    academic_service: AcademicService
    justification_service: JustificationService
    schedule_service: ScheduleService
    attendance_service: AttendanceService
    payment_service: PaymentService

    def close(self) -> None:
        self.legacy_host.session.close()
        if self.conn is not None:
            self.conn.close()


def build_services(
    *,
    conn: Optional[DatabaseConnection],
    legacy_host: LegacyHost,
    students_repo: StudentRepository,
    academics_repo: AcademicRepository,
    justifications_repo: JustificationRepository,
    schedules_repo: ScheduleRepository,
    attendance_repo: AttendanceRepository,
    payments_repo: PaymentRepository,
    profile_images: ProfileImageStore,
    uploader: Optional[RemoteImageUploader] = None,
    justification_max_files: int = DEFAULT_JUSTIFICATION_MAX_FILES,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
) -> Container:
    """Wire services on top of already-built repositories (tests pass fakes here)."""

    uploader = uploader or RemoteImageUploader(legacy_host)

    return Container(
        conn=conn,
        legacy_host=legacy_host,
        students_repo=students_repo,
        academics_repo=academics_repo,
        justifications_repo=justifications_repo,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        auth_service=AuthService(students_repo),
        student_service=StudentService(
            students_repo,
            academics_repo,
            legacy_host,
            profile_images,
            max_file_size=max_file_size,
        ),
        academic_service=AcademicService(academics_repo, students_repo),
        justification_service=JustificationService(
            justifications_repo,
            uploader,
            max_files=justification_max_files,
            max_file_size=max_file_size,
        ),
        schedule_service=ScheduleService(schedules_repo, legacy_host),
        attendance_service=AttendanceService(attendance_repo, students_repo),
        payment_service=PaymentService(payments_repo, students_repo),
    )


def build_container(
    *,
    db_config: dict,
    legacy_base_url: str,
    profile_images_dir: str,
    pool_size: int = DEFAULT_POOL_SIZE,
    upload_timeout: Optional[float] = None,
    probe_timeout: Optional[float] = None,
    justification_max_files: int = DEFAULT_JUSTIFICATION_MAX_FILES,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config, pool_size=pool_size))
    legacy_host = LegacyHost(legacy_base_url, probe_timeout=probe_timeout)

    return build_services(
        conn=conn,
        legacy_host=legacy_host,
        students_repo=MySQLStudentRepository(conn),
        academics_repo=MySQLAcademicRepository(conn),
        justifications_repo=MySQLJustificationRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        profile_images=ProfileImageStore(profile_images_dir),
        uploader=RemoteImageUploader(legacy_host, timeout=upload_timeout),
        justification_max_files=justification_max_files,
        max_file_size=max_file_size,
    )
