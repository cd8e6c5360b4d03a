from __future__ import annotations

import pytest

from src.cameco_hris.cameco_hris.core.constants import DEFAULT_DEPARTMENTS
from src.cameco_hris.cameco_hris.core.enums import Role
from src.cameco_hris.cameco_hris.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.cameco_hris.cameco_hris.organization.service import DepartmentService
from tests.fakes import InMemoryAudit, InMemoryDepartments, InMemoryUsers, make_user


def _service(users=None):
    repo = InMemoryDepartments(users)
    audit = InMemoryAudit()
    return DepartmentService(repo, audit), repo, audit


def _create(svc, **payload):
    return svc.create(current_role=Role.OFFICE_ADMIN, user_id=2, payload=payload)


def test_create_normalizes_and_audits():
    svc, _, audit = _service()
    dept = _create(svc, name=" Human Resources ", code="hr", budget="150000")

    assert dept.name == "Human Resources"
    assert dept.code == "HR"
    assert dept.budget == 150000
    assert dept.is_active is True
    assert audit.actions() == ["department_created"]


def test_create_requires_manager_role():
    svc, *_ = _service()
    with pytest.raises(AuthorizationError):
        svc.create(current_role=Role.HR_MANAGER, user_id=3, payload={"name": "IT", "code": "IT"})


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "", "code": "X"},
        {"name": "Ops", "code": ""},
        {"name": "Ops", "code": "OPS", "budget": "-1"},
        {"name": "Ops", "code": "OPS", "budget": "lots"},
        {"name": "Ops", "code": "OPS", "parent_id": "99"},
    ],
)
def test_create_validation(payload):
    svc, repo, _ = _service()
    with pytest.raises(ValidationError):
        _create(svc, **payload)
    assert repo.count() == 0


def test_name_and_code_are_unique():
    svc, *_ = _service()
    _create(svc, name="Finance", code="FIN")
    with pytest.raises(ValidationError):
        _create(svc, name="Finance", code="FIN2")
    with pytest.raises(ValidationError):
        _create(svc, name="Finance 2", code="fin")


def test_update_keeps_own_name_and_code():
    svc, *_ = _service()
    dept = _create(svc, name="Finance", code="FIN")
    updated = svc.update(
        current_role=Role.OFFICE_ADMIN,
        user_id=2,
        department_id=dept.department_id,
        payload={"name": "Finance", "code": "FIN", "description": "Money", "is_active": "0"},
    )
    assert updated.description == "Money"
    assert updated.is_active is False


def test_update_parent_cannot_be_self_or_descendant():
    svc, *_ = _service()
    root = _create(svc, name="Finance", code="FIN")
    child = _create(svc, name="Payroll", code="FIN-PAY", parent_id=root.department_id)

    with pytest.raises(ValidationError):
        svc.update(
            current_role=Role.OFFICE_ADMIN,
            user_id=2,
            department_id=root.department_id,
            payload={"name": "Finance", "code": "FIN", "parent_id": root.department_id},
        )
    with pytest.raises(ValidationError):
        svc.update(
            current_role=Role.OFFICE_ADMIN,
            user_id=2,
            department_id=root.department_id,
            payload={"name": "Finance", "code": "FIN", "parent_id": child.department_id},
        )


def test_update_unknown_department():
    svc, *_ = _service()
    with pytest.raises(NotFoundError):
        svc.update(current_role=Role.OFFICE_ADMIN, user_id=2, department_id=5, payload={"name": "A", "code": "A"})


def test_delete_refused_with_children():
    svc, repo, audit = _service()
    root = _create(svc, name="Finance", code="FIN")
    child = _create(svc, name="Payroll", code="FIN-PAY", parent_id=root.department_id)

    with pytest.raises(ValidationError):
        svc.delete(current_role=Role.OFFICE_ADMIN, user_id=2, department_id=root.department_id)

    svc.delete(current_role=Role.OFFICE_ADMIN, user_id=2, department_id=child.department_id)
    svc.delete(current_role=Role.OFFICE_ADMIN, user_id=2, department_id=root.department_id)
    assert repo.count() == 0
    assert audit.actions().count("department_deleted") == 2


def test_delete_refused_while_employees_are_assigned():
    users = InMemoryUsers()
    svc, repo, audit = _service(users)
    plant = _create(svc, name="Plant", code="PLT")
    users.add(make_user(4, Role.EMPLOYEE, department_id=plant.department_id))

    with pytest.raises(ValidationError, match="assigned employees"):
        svc.delete(current_role=Role.OFFICE_ADMIN, user_id=2, department_id=plant.department_id)
    assert repo.get_by_id(plant.department_id) is not None
    assert "department_deleted" not in audit.actions()

    users.add(make_user(4, Role.EMPLOYEE, department_id=None))
    svc.delete(current_role=Role.OFFICE_ADMIN, user_id=2, department_id=plant.department_id)
    assert repo.count() == 0


def test_tree_and_stats():
    svc, *_ = _service()
    root = _create(svc, name="Finance", code="FIN", budget=100, manager_id=9)
    _create(svc, name="Payroll", code="FIN-PAY", parent_id=root.department_id, budget=50)
    _create(svc, name="Admin", code="ADMIN", is_active=False)

    tree = svc.tree()
    by_code = {node["code"]: node for node in tree}
    assert set(by_code) == {"FIN", "ADMIN"}
    assert by_code["FIN"]["depth"] == 0
    assert [c["code"] for c in by_code["FIN"]["children"]] == ["FIN-PAY"]
    assert by_code["FIN"]["children"][0]["depth"] == 1

    assert svc.stats() == {"total": 3, "active": 2, "inactive": 1, "with_manager": 1, "total_budget": 150}


def test_seed_defaults_builds_ph_structure():
    svc, repo, audit = _service()
    created = svc.seed_defaults(current_role=Role.SUPER_ADMIN, user_id=1)

    assert len(created) == len(DEFAULT_DEPARTMENTS)
    hr = repo.get_by_code("HR")
    fin = repo.get_by_code("FIN")
    assert repo.get_by_code("HR-REC").parent_id == hr.department_id
    assert repo.get_by_code("FIN-PAY").parent_id == fin.department_id
    assert repo.get_by_code("EXEC").parent_id is None
    assert sum(1 for d in repo.list_all() if d.parent_id is None) == 7

    assert audit.actions() == ["seed_departments"]
    assert audit.entries[0].metadata["total_departments"] == len(DEFAULT_DEPARTMENTS)


def test_seed_custom_flat_list():
    svc, repo, _ = _service()
    created = svc.seed_defaults(
        current_role=Role.SUPER_ADMIN,
        user_id=1,
        departments=[{"name": "Plant", "code": "PLT", "parent_code": "X"}, {"name": "Office", "code": "OFC"}],
    )
    assert [d.code for d in created] == ["PLT", "OFC"]
    assert all(d.parent_id is None for d in repo.list_all())


def test_seed_is_super_admin_only_and_once():
    svc, repo, _ = _service()
    with pytest.raises(AuthorizationError):
        svc.seed_defaults(current_role=Role.OFFICE_ADMIN, user_id=2)

    svc.seed_defaults(current_role=Role.SUPER_ADMIN, user_id=1)
    with pytest.raises(ValidationError):
        svc.seed_defaults(current_role=Role.SUPER_ADMIN, user_id=1)
    assert repo.count() == len(DEFAULT_DEPARTMENTS)


def test_seed_rejects_duplicate_codes_before_writing():
    svc, repo, _ = _service()
    with pytest.raises(ValidationError):
        svc.seed_defaults(
            current_role=Role.SUPER_ADMIN,
            user_id=1,
            departments=[{"name": "A", "code": "A"}, {"name": "B", "code": "a"}],
        )
    assert repo.count() == 0


def test_seed_rejects_duplicate_names_before_writing():
    svc, repo, audit = _service()
    with pytest.raises(ValidationError, match="names must be unique"):
        svc.seed_defaults(
            current_role=Role.SUPER_ADMIN,
            user_id=1,
            departments=[{"name": "Ops", "code": "A"}, {"name": "OPS", "code": "B"}],
        )
    assert repo.count() == 0
    assert audit.entries == []


@pytest.mark.parametrize("departments", [["HR"], [1, 2], '["HR"]'])
def test_seed_custom_list_without_objects_is_rejected(departments):
    svc, repo, _ = _service()
    with pytest.raises(ValidationError):
        svc.seed_defaults(current_role=Role.SUPER_ADMIN, user_id=1, departments=departments)
    assert repo.count() == 0
