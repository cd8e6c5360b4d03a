from __future__ import annotations

from dataclasses import dataclass

from .admin_onboarding.mysql_employee_repository import MySQLEmployeeRepository
from .admin_onboarding.repository import EmployeeRepository
from .admin_onboarding.service import AdminOnboardingService
from .audit.mysql_audit_repository import MySQLAuditLogRepository
from .audit.repository import AuditLogRepository
from .database.connection import DBConfig, DatabaseConnection
from .organization.mysql_department_repository import MySQLDepartmentRepository
from .organization.repository import DepartmentRepository
from .organization.service import DepartmentService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .system_onboarding.mysql_system_onboarding_repository import MySQLSystemOnboardingRepository
from .system_onboarding.repository import SystemOnboardingRepository
from .system_onboarding.service import SystemOnboardingService
from .user_onboarding.mysql_user_onboarding_repository import MySQLUserOnboardingRepository
from .user_onboarding.repository import UserOnboardingRepository
from .user_onboarding.service import UserOnboardingService
from .users.mysql_profile_repository import MySQLProfileRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import ProfileRepository, UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    user_repo: UserRepository
    profile_repo: ProfileRepository
    settings_repo: SettingsRepository
    audit_repo: AuditLogRepository
    department_repo: DepartmentRepository
    employee_repo: EmployeeRepository
    system_onboarding_repo: SystemOnboardingRepository
    user_onboarding_repo: UserOnboardingRepository

    auth_service: AuthService
    system_onboarding_service: SystemOnboardingService
    user_onboarding_service: UserOnboardingService
    admin_onboarding_service: AdminOnboardingService
    department_service: DepartmentService


def wire(
    *,
    user_repo: UserRepository,
    profile_repo: ProfileRepository,
    settings_repo: SettingsRepository,
    audit_repo: AuditLogRepository,
    department_repo: DepartmentRepository,
    employee_repo: EmployeeRepository,
    system_onboarding_repo: SystemOnboardingRepository,
    user_onboarding_repo: UserOnboardingRepository,
) -> Container:
    """Build services over any set of repositories (MySQL in the app, fakes in tests)."""
    return Container(
        user_repo=user_repo,
        profile_repo=profile_repo,
        settings_repo=settings_repo,
        audit_repo=audit_repo,
        department_repo=department_repo,
        employee_repo=employee_repo,
        system_onboarding_repo=system_onboarding_repo,
        user_onboarding_repo=user_onboarding_repo,
        auth_service=AuthService(user_repo),
        system_onboarding_service=SystemOnboardingService(system_onboarding_repo, settings_repo, audit_repo),
        user_onboarding_service=UserOnboardingService(user_onboarding_repo, user_repo, profile_repo, audit_repo),
        admin_onboarding_service=AdminOnboardingService(user_repo, employee_repo, department_repo),
        department_service=DepartmentService(department_repo, audit_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire(
        user_repo=MySQLUserRepository(conn),
        profile_repo=MySQLProfileRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        audit_repo=MySQLAuditLogRepository(conn),
        department_repo=MySQLDepartmentRepository(conn),
        employee_repo=MySQLEmployeeRepository(conn),
        system_onboarding_repo=MySQLSystemOnboardingRepository(conn),
        user_onboarding_repo=MySQLUserOnboardingRepository(conn),
    )
