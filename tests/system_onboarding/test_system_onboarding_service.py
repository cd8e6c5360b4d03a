from __future__ import annotations

import pytest

from src.cameco_hris.cameco_hris.audit.model import AuditRecord
from src.cameco_hris.cameco_hris.core.enums import OnboardingStatus, Role
from src.cameco_hris.cameco_hris.core.exceptions import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from src.cameco_hris.cameco_hris.system_onboarding.service import (
    SystemOnboardingService,
    can_transition,
    next_owner_role,
)
from tests.fakes import NOW, InMemoryAudit, InMemorySettings, InMemorySystemOnboardings

COMPANY = {
    "company_name": "Cathay Metal Corporation",
    "company_reg_number": "CS200412345",
    "country": "PH",
    "timezone": "Asia/Manila",
    "currency": "PHP",
    "fiscal_year_start_month": "1",
    "contact_email": "hr@cameco.com",
}


def _service():
    settings = InMemorySettings()
    audit = InMemoryAudit()
    repo = InMemorySystemOnboardings(settings, audit)
    return SystemOnboardingService(repo, settings, audit), repo, settings, audit


def _initialized():
    svc, repo, settings, audit = _service()
    onboarding_id = svc.initialize(current_role=Role.SUPER_ADMIN, user_id=1, payload=COMPANY, now=NOW)
    return svc, repo, settings, audit, onboarding_id


def test_owner_order():
    assert next_owner_role(Role.SUPER_ADMIN) == Role.OFFICE_ADMIN
    assert next_owner_role(Role.OFFICE_ADMIN) == Role.HR_MANAGER
    assert next_owner_role(Role.HR_MANAGER) is None
    assert next_owner_role(Role.EMPLOYEE) is None

    assert can_transition(Role.SUPER_ADMIN, Role.OFFICE_ADMIN)
    assert not can_transition(Role.SUPER_ADMIN, Role.HR_MANAGER)
    assert not can_transition(Role.OFFICE_ADMIN, Role.SUPER_ADMIN)


def test_initialize_creates_row_settings_and_audit():
    svc, repo, settings, audit, onboarding_id = _initialized()

    row = repo.get_by_id(onboarding_id)
    assert row.status == OnboardingStatus.NOT_STARTED
    assert row.current_owner_role == Role.SUPER_ADMIN
    assert row.created_by == 1
    assert row.metadata["company_name"] == "Cathay Metal Corporation"

    assert settings.values["company_name"] == "Cathay Metal Corporation"
    assert settings.values["company_registration_number"] == "CS200412345"
    assert settings.values["fiscal_year_start_month"] == "1"
    assert audit.actions() == ["system_onboarding_initialize"]


def test_initialize_requires_super_admin():
    svc, *_ = _service()
    with pytest.raises(AuthorizationError):
        svc.initialize(current_role=Role.OFFICE_ADMIN, user_id=2, payload=COMPANY)


def test_initialize_twice_is_rejected():
    svc, repo, *_ = _initialized()
    with pytest.raises(InvalidTransitionError):
        svc.initialize(current_role=Role.SUPER_ADMIN, user_id=1, payload=COMPANY)
    assert len(repo.rows) == 1


def test_failed_audit_write_leaves_nothing_behind():
    svc, repo, settings, audit = _service()
    audit.fail_logs = True
    with pytest.raises(RuntimeError):
        svc.initialize(current_role=Role.SUPER_ADMIN, user_id=1, payload=COMPANY, now=NOW)
    assert repo.rows == {}
    assert settings.values == {}
    assert svc.get_status().onboarding_id is None

    # nothing was stored, so a retry is not blocked
    audit.fail_logs = False
    onboarding_id = svc.initialize(current_role=Role.SUPER_ADMIN, user_id=1, payload=COMPANY, now=NOW)
    assert repo.get_by_id(onboarding_id).status == OnboardingStatus.NOT_STARTED
    assert audit.actions() == ["system_onboarding_initialize"]


def test_repository_keeps_a_single_workflow_row():
    _, repo, *_ = _initialized()
    with pytest.raises(InvalidTransitionError):
        repo.initialize(
            status=OnboardingStatus.NOT_STARTED,
            current_owner_role=Role.SUPER_ADMIN,
            metadata={},
            created_by=1,
            started_at=NOW,
            settings={},
            audit=AuditRecord(user_id=1, action="system_onboarding_initialize", description="again"),
        )
    assert len(repo.rows) == 1


@pytest.mark.parametrize(
    "field,value",
    [
        ("company_name", "X"),
        ("company_name", ""),
        ("country", "VN"),
        ("currency", "EUR"),
        ("timezone", "Mars/Olympus"),
        ("fiscal_year_start_month", "13"),
        ("fiscal_year_start_month", "jan"),
        ("contact_email", "not-an-email"),
        ("company_reg_number", "R" * 51),
    ],
)
def test_initialize_validates_company_profile(field, value):
    svc, repo, settings, audit = _service()
    with pytest.raises(ValidationError):
        svc.initialize(current_role=Role.SUPER_ADMIN, user_id=1, payload={**COMPANY, field: value})
    assert repo.rows == {}
    assert settings.values == {}
    assert audit.entries == []


def test_initialize_optional_fields_may_be_blank():
    svc, repo, settings, _ = _service()
    svc.initialize(
        current_role=Role.SUPER_ADMIN,
        user_id=1,
        payload={**COMPANY, "company_reg_number": "", "contact_email": ""},
    )
    assert "contact_email" not in settings.values
    assert "company_registration_number" not in settings.values


def test_full_workflow_walks_forward_to_completed():
    svc, repo, _, audit, onboarding_id = _initialized()

    row = svc.transition(current_role=Role.SUPER_ADMIN, user_id=1, onboarding_id=onboarding_id, next_role="office_admin")
    assert row.status == OnboardingStatus.IN_PROGRESS
    assert row.current_owner_role == Role.OFFICE_ADMIN

    row = svc.transition(current_role=Role.OFFICE_ADMIN, user_id=2, onboarding_id=onboarding_id, next_role="hr_manager")
    assert row.current_owner_role == Role.HR_MANAGER

    row = svc.complete(current_role=Role.HR_MANAGER, user_id=3, onboarding_id=onboarding_id, now=NOW)
    assert row.status == OnboardingStatus.COMPLETED
    assert row.completed_at == NOW
    assert svc.is_completed()

    assert audit.actions() == [
        "system_onboarding_initialize",
        "system_onboarding_transition",
        "system_onboarding_transition",
        "system_onboarding_complete",
    ]


def test_transition_cannot_skip_or_go_backwards():
    svc, _, _, _, onboarding_id = _initialized()
    with pytest.raises(InvalidTransitionError):
        svc.transition(current_role=Role.SUPER_ADMIN, user_id=1, onboarding_id=onboarding_id, next_role="hr_manager")

    svc.transition(current_role=Role.SUPER_ADMIN, user_id=1, onboarding_id=onboarding_id, next_role="office_admin")
    with pytest.raises(InvalidTransitionError):
        svc.transition(current_role=Role.OFFICE_ADMIN, user_id=2, onboarding_id=onboarding_id, next_role="super_admin")


def test_transition_rejects_unknown_role():
    svc, _, _, _, onboarding_id = _initialized()
    with pytest.raises(ValidationError):
        svc.transition(current_role=Role.SUPER_ADMIN, user_id=1, onboarding_id=onboarding_id, next_role="ceo")


def test_only_current_owner_may_transition():
    svc, _, _, _, onboarding_id = _initialized()
    with pytest.raises(AuthorizationError):
        svc.transition(current_role=Role.OFFICE_ADMIN, user_id=2, onboarding_id=onboarding_id, next_role="office_admin")


def test_super_admin_may_act_for_any_owner():
    svc, _, _, _, onboarding_id = _initialized()
    svc.transition(current_role=Role.SUPER_ADMIN, user_id=1, onboarding_id=onboarding_id, next_role="office_admin")
    row = svc.transition(current_role=Role.SUPER_ADMIN, user_id=1, onboarding_id=onboarding_id, next_role="hr_manager")
    assert row.current_owner_role == Role.HR_MANAGER


def test_unknown_onboarding_id_is_not_found():
    svc, *_ = _initialized()
    with pytest.raises(NotFoundError):
        svc.transition(current_role=Role.SUPER_ADMIN, user_id=1, onboarding_id=99, next_role="office_admin")
    with pytest.raises(NotFoundError):
        svc.complete(current_role=Role.SUPER_ADMIN, user_id=1, onboarding_id=99)


def test_complete_requires_hr_manager_ownership():
    svc, _, _, _, onboarding_id = _initialized()
    with pytest.raises(InvalidTransitionError):
        svc.complete(current_role=Role.SUPER_ADMIN, user_id=1, onboarding_id=onboarding_id)


def test_completed_workflow_is_frozen():
    svc, _, _, _, onboarding_id = _initialized()
    svc.transition(current_role=Role.SUPER_ADMIN, user_id=1, onboarding_id=onboarding_id, next_role="office_admin")
    svc.transition(current_role=Role.OFFICE_ADMIN, user_id=2, onboarding_id=onboarding_id, next_role="hr_manager")
    svc.complete(current_role=Role.HR_MANAGER, user_id=3, onboarding_id=onboarding_id)

    with pytest.raises(InvalidTransitionError):
        svc.complete(current_role=Role.HR_MANAGER, user_id=3, onboarding_id=onboarding_id)
    with pytest.raises(InvalidTransitionError):
        svc.transition(current_role=Role.SUPER_ADMIN, user_id=1, onboarding_id=onboarding_id, next_role="office_admin")


def test_status_before_and_after_initialize():
    svc, *_ = _service()
    status = svc.get_status().as_dict()
    assert status["status"] == "not_started"
    assert status["id"] is None
    assert status["company_name"] is None

    svc.initialize(current_role=Role.SUPER_ADMIN, user_id=1, payload=COMPANY, now=NOW)
    status = svc.get_status().as_dict()
    assert status["status"] == "not_started"
    assert status["current_owner_role"] == "super_admin"
    assert status["next_owner_role"] == "office_admin"
    assert status["started_at"] == NOW.isoformat()
    assert status["company_name"] == "Cathay Metal Corporation"
    assert status["timezone"] == "Asia/Manila"
