import pytest

from tulusapi.constants import ERROR_NOT_FOUND
from tulusapi.models import (
    RecordNotFound,
    ReqLogin,
    ReqRegister,
    UserClaims,
    ValidationError,
)


def test_req_login_from_dict():
    password = "password"
    req = ReqLogin.from_dict({"user_name": "alice", "password": "password"})
    assert req == ReqLogin(user_name="alice", password=password)


def test_req_login_missing_password_fails_required():
    with pytest.raises(ValidationError) as info:
        ReqLogin.from_dict({"user_name": "alice"})
    assert "'ReqLogin.Password'" in str(info.value)
    assert "'required'" in str(info.value)


def test_req_login_empty_user_name_fails_required():
    with pytest.raises(ValidationError) as info:
        ReqLogin.from_dict({"user_name": "", "password": "password"})
    assert "'ReqLogin.UserName'" in str(info.value)


def test_req_login_rejects_non_string_field():
    with pytest.raises(ValidationError):
        ReqLogin.from_dict({"user_name": 5, "password": "password"})


def test_req_login_rejects_non_object_body():
    with pytest.raises(ValidationError):
        ReqLogin.from_dict(["alice"])


def test_req_register_from_dict():
    req = ReqRegister.from_dict({"name": "Alice", "user_name": "alice", "password": "password"})
    assert (req.name, req.user_name, req.password) == ("Alice", "alice", "password")


def test_req_register_reports_every_missing_field():
    with pytest.raises(ValidationError) as info:
        ReqRegister.from_dict({})
    lines = str(info.value).splitlines()
    assert len(lines) == 3
    assert "'ReqRegister.Name'" in lines[0]


def test_record_not_found_message():
    err = RecordNotFound()
    assert str(err) == ERROR_NOT_FOUND
    assert isinstance(err, LookupError)


def test_user_claims_from_dict():
    claims = UserClaims.from_dict({"user_name": "alice", "iss": "7", "exp": 1700000000})
    assert claims.user_name == "alice"
    assert claims.issuer == "7"
    assert claims.expires_at == 1700000000
    assert claims.subject == ""


def test_user_claims_ignores_unknown_keys():
    claims = UserClaims.from_dict({"user_name": "bob", "is": "3"})
    assert claims.issuer == ""
    assert claims.user_name == "bob"


def test_user_claims_rejects_bad_types():
    with pytest.raises(ValidationError):
        UserClaims.from_dict({"exp": "soon"})