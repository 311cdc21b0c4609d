from datetime import datetime, timedelta, timezone

import jwt
import pytest

from tulusapi.models import RecordNotFound, ReqLogin, ReqRegister, User
from tulusapi.user_usecase import UserUsecase, hash_password

SECRET_KEY = "secret"
FIXED_NOW = datetime(2030, 1, 1, tzinfo=timezone.utc)


class MemoryStore:
    def __init__(self, fail_create=False):
        self.users = {}
        self.fail_create = fail_create

    def get_by_id(self, user_id):
        for user in self.users.values():
            if user.id == user_id:
                return user
        raise RecordNotFound()

    def get_by_user_name(self, user_name):
        try:
            return self.users[user_name]
        except KeyError:
            raise RecordNotFound() from None

    def create_user(self, user):
        if self.fail_create:
            raise RuntimeError("insert failed")
        user.id = len(self.users) + 1
        self.users[user.user_name] = user


@pytest.fixture
def store():
    memory = MemoryStore()
    memory.create_user(User(name="Alice", user_name="alice", password=hash_password("password")))
    return memory


@pytest.fixture
def usecase(store):
    return UserUsecase(store, SECRET_KEY, clock=lambda: FIXED_NOW)


def test_hash_password_is_md5_hex():
    assert hash_password("") == "d41d8cd98f00b204e9800998ecf8427e"
    assert hash_password("password") == hash_password("password")
    assert len(hash_password("password")) == 32


def test_login_success_issues_token(usecase):
    password = "password"
    res = usecase.login(ReqLogin(user_name="alice", password=password))
    assert res.response_code == "200"
    assert res.response_message == "Success"
    assert res.data.expires_at == int((FIXED_NOW + timedelta(minutes=5)).timestamp())
    claims = jwt.decode(res.data.access_token, SECRET_KEY, algorithms=["HS256"])
    assert claims == {"user_name": "alice", "exp": res.data.expires_at, "is": "1"}


def test_login_wrong_password(usecase):
    password = "token"
    res = usecase.login(ReqLogin(user_name="alice", password=password))
    assert (res.response_code, res.response_message) == ("401", "Unauthorized.")
    assert res.data.access_token == ""


def test_login_unknown_user(usecase):
    password = "password"
    res = usecase.login(ReqLogin(user_name="bob", password=password))
    assert (res.response_code, res.response_message) == ("401", "Unautorized.")
    assert res.to_dict()["data"]["access_token"] == ""


def test_register_success(store, usecase):
    password = "password"
    res = usecase.register(ReqRegister(name="Bob", user_name="bob", password=password))
    assert res.response_code == "200"
    assert res.to_dict()["data"] == {"name": "Bob", "user_name": "bob"}
    assert store.users["bob"].password == "password"


def test_register_failure_omits_data():
    usecase = UserUsecase(MemoryStore(fail_create=True), SECRET_KEY)
    password = "password"
    res = usecase.register(ReqRegister(name="Bob", user_name="bob", password=password))
    assert res.to_dict() == {"response_code": "500", "response_message": "Internal server error"}


def test_register_then_login_round_trip():
    store = MemoryStore()
    usecase = UserUsecase(store, SECRET_KEY)
    password = "password"
    usecase.register(ReqRegister(name="Carol", user_name="carol", password=hash_password(password)))
    res = usecase.login(ReqLogin(user_name="carol", password=password))
    assert res.response_code == "200"
    claims = jwt.decode(res.data.access_token, SECRET_KEY, algorithms=["HS256"])
    assert claims["user_name"] == "carol"