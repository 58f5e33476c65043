from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from werkzeug.security import generate_password_hash

from src.courier_hrms.courier_hrms.common.otp_store import OtpStore
from src.courier_hrms.courier_hrms.core.enums import AccountStatus, Role
from src.courier_hrms.courier_hrms.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from src.courier_hrms.courier_hrms.users.service import AuthService, UserService

PASSWORD = "s3cret"


@pytest.fixture
def accounts(users, make_employee):
    hashed = generate_password_hash(PASSWORD)
    users.add(make_employee(10, password_hash=hashed))
    users.add(make_employee(11, password_hash=hashed, is_account_activated=False))
    users.add(make_employee(12, password_hash=hashed, status=AccountStatus.SUSPENDED))
    users.add(
        make_employee(
            13,
            fhr_id="",
            role=Role.ADMIN,
            password_hash=hashed,
            is_account_activated=False,
            status=AccountStatus.PENDING,
        )
    )
    users.add(make_employee(14, password_hash="CHANGE_ME"))
    return users


def test_login_ok(accounts):
    session = AuthService(accounts).authenticate("9000000010", PASSWORD)

    assert session.user_id == 10
    assert session.role == Role.EMPLOYEE
    assert session.fhr_id == "FHR010"


def test_admin_bypasses_activation(accounts):
    assert AuthService(accounts).authenticate("9000000013", PASSWORD).role == Role.ADMIN


@pytest.mark.parametrize("mobile", ["9000000011", "9000000012"])
def test_inactive_accounts_cannot_login(accounts, mobile):
    with pytest.raises(AuthenticationError):
        AuthService(accounts).authenticate(mobile, PASSWORD)


@pytest.mark.parametrize(
    "mobile, password",
    [("9000000010", "wrong"), ("9000000010", ""), ("9999999999", PASSWORD), ("9000000014", PASSWORD)],
)
def test_bad_credentials(accounts, mobile, password):
    with pytest.raises(AuthenticationError):
        AuthService(accounts).authenticate(mobile, password)


def test_blank_mobile_is_validation_error(accounts):
    with pytest.raises(ValidationError):
        AuthService(accounts).authenticate("  ", PASSWORD)


def test_otp_login_flow(accounts):
    sent = []
    auth = AuthService(accounts, otp_store=OtpStore(), otp_sender=lambda mobile, code: sent.append((mobile, code)))

    code = auth.request_otp("9000000010")

    assert sent == [("9000000010", code)]
    assert len(code) == 6 and code.isdigit()
    assert auth.authenticate_otp("9000000010", code).user_id == 10
    with pytest.raises(AuthenticationError):
        auth.authenticate_otp("9000000010", code)


def test_otp_expires(accounts):
    now = [datetime(2026, 2, 10, 9, 0)]
    auth = AuthService(accounts, otp_store=OtpStore(ttl_seconds=60, clock=lambda: now[0]))
    code = auth.request_otp("9000000010")

    now[0] += timedelta(seconds=61)

    with pytest.raises(AuthenticationError):
        auth.authenticate_otp("9000000010", code)


def test_injected_empty_store_is_kept(accounts):
    store = OtpStore(ttl_seconds=60)
    auth = AuthService(accounts, otp_store=store)

    code = auth.request_otp("9000000010")

    assert len(store) == 1
    assert store.peek("9000000010").code == code


def test_otp_unknown_mobile(accounts):
    with pytest.raises(NotFoundError):
        AuthService(accounts).request_otp("9999999999")


def test_otp_inactive_account(accounts):
    auth = AuthService(accounts)
    code = auth.request_otp("9000000011")

    with pytest.raises(AuthenticationError):
        auth.authenticate_otp("9000000011", code)


def test_deactivate_is_soft_delete(accounts):
    UserService(accounts).deactivate(current_role=Role.ADMIN, user_id=10)

    user = accounts.get_by_id(10)
    assert user is not None
    assert user.status == AccountStatus.INACTIVE
    assert 10 not in [u.user_id for u in accounts.list_active_employees()]


def test_deactivate_requires_admin(accounts):
    with pytest.raises(AuthorizationError):
        UserService(accounts).deactivate(current_role=Role.EMPLOYEE, user_id=10)


def test_admin_cannot_be_deactivated(accounts):
    with pytest.raises(ValidationError):
        UserService(accounts).deactivate(current_role=Role.ADMIN, user_id=13)


def test_deactivate_unknown_user(accounts):
    with pytest.raises(NotFoundError):
        UserService(accounts).deactivate(current_role=Role.ADMIN, user_id=404)


@pytest.fixture
def joiners(accounts, make_employee):
    hashed = generate_password_hash(PASSWORD)
    accounts.add(
        make_employee(40, role=Role.PENDING, status=AccountStatus.PENDING, is_account_activated=False, is_approved=False, password_hash=hashed)
    )
    accounts.add(make_employee(41, role=Role.PENDING, status=AccountStatus.PENDING, is_account_activated=False, is_approved=False))
    return accounts


def test_list_pending(joiners):
    assert [u.user_id for u in UserService(joiners).list_pending()] == [40, 41]


def test_approve_activates_joiner(joiners):
    with pytest.raises(AuthenticationError):
        AuthService(joiners).authenticate("9000000040", PASSWORD)

    user = UserService(joiners).approve(current_role=Role.ADMIN, user_id=40)

    assert user.role == Role.EMPLOYEE
    assert user.status == AccountStatus.ACTIVE
    assert user.is_approved and user.is_account_activated
    assert 40 in [u.user_id for u in joiners.list_active_employees()]
    assert AuthService(joiners).authenticate("9000000040", PASSWORD).role == Role.EMPLOYEE


def test_reject_joiner(joiners):
    user = UserService(joiners).reject(current_role=Role.ADMIN, user_id=41)

    assert user.role == Role.REJECTED
    assert user.status == AccountStatus.REJECTED
    assert not user.can_login


def test_approve_twice_is_rejected(joiners):
    svc = UserService(joiners)
    svc.approve(current_role=Role.ADMIN, user_id=40)

    with pytest.raises(ValidationError):
        svc.approve(current_role=Role.ADMIN, user_id=40)
    with pytest.raises(ValidationError):
        svc.reject(current_role=Role.ADMIN, user_id=10)


@pytest.mark.parametrize("role", [Role.HR, Role.EMPLOYEE])
def test_only_admin_decides_joiners(joiners, role):
    with pytest.raises(AuthorizationError):
        UserService(joiners).approve(current_role=role, user_id=40)
