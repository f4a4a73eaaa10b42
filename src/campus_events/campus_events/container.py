from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .colleges.mysql_college_repository import MySQLCollegeRepository
from .colleges.repository import CollegeRepository
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .feedback.mysql_feedback_repository import MySQLFeedbackRepository
from .feedback.repository import FeedbackRepository
from .feedback.service import FeedbackService
from .registrations.mysql_registration_repository import MySQLRegistrationRepository
from .registrations.repository import RegistrationRepository
from .registrations.service import RegistrationService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository


@dataclass(frozen=True)
class Container:
    # None when the repositories are not MySQL-backed (tests)
    conn: Optional[DatabaseConnection]

    colleges_repo: CollegeRepository
    students_repo: StudentRepository
    events_repo: EventRepository
    registrations_repo: RegistrationRepository
    attendance_repo: AttendanceRepository
    feedback_repo: FeedbackRepository
    reports_repo: ReportRepository

    event_service: EventService
    registration_service: RegistrationService
    attendance_service: AttendanceService
    feedback_service: FeedbackService
    report_service: ReportService


def build_services(
    *,
    conn: Optional[DatabaseConnection],
    colleges_repo: CollegeRepository,
    students_repo: StudentRepository,
    events_repo: EventRepository,
    registrations_repo: RegistrationRepository,
    attendance_repo: AttendanceRepository,
    feedback_repo: FeedbackRepository,
    reports_repo: ReportRepository,
    transaction,
    public_base_url: str = "",
) -> Container:
    """Wire services onto a set of repositories sharing one ``transaction``."""

    return Container(
        conn=conn,
        colleges_repo=colleges_repo,
        students_repo=students_repo,
        events_repo=events_repo,
        registrations_repo=registrations_repo,
        attendance_repo=attendance_repo,
        feedback_repo=feedback_repo,
        reports_repo=reports_repo,
        event_service=EventService(colleges_repo, events_repo, students_repo, transaction=transaction),
        registration_service=RegistrationService(
            events_repo, students_repo, registrations_repo, transaction=transaction
        ),
        attendance_service=AttendanceService(
            registrations_repo,
            attendance_repo,
            transaction=transaction,
            public_base_url=public_base_url,
        ),
        feedback_service=FeedbackService(registrations_repo, feedback_repo, transaction=transaction),
        report_service=ReportService(reports_repo),
    )


def build_container(*, db_config: dict, public_base_url: str = "") -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(
        conn=conn,
        colleges_repo=MySQLCollegeRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        events_repo=MySQLEventRepository(conn),
        registrations_repo=MySQLRegistrationRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        feedback_repo=MySQLFeedbackRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        transaction=conn.transaction,
        public_base_url=public_base_url,
    )
