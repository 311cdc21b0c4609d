import json

from tulusapi.dto import Pagination, Res, ResLogin, ResRegister, Token, UserDto


def test_res_omits_empty_meta_and_data():
    res = Res(response_code="401", response_message="Unauthorized")
    assert res.to_dict() == {"response_code": "401", "response_message": "Unauthorized"}


def test_res_includes_meta_and_nested_data():
    page = Pagination(page_number=1, per_page=20, total_page=3, total_record=55)
    res = Res(response_code="200", response_message="Success", meta=page, data=[1, 2])
    out = res.to_dict()
    assert out["meta"] == {
        "page_number": 1,
        "per_page": 20,
        "total_page": 3,
        "total_record": 55,
    }
    assert out["data"] == [1, 2]


def test_res_login_always_carries_token():
    out = ResLogin(response_code="401", response_message="Unauthorized.").to_dict()
    assert out["data"] == {"access_token": "", "expires_at": 0, "token_type": ""}
    assert "meta" not in out


def test_res_login_with_token_round_trips_through_json():
    res = ResLogin(
        response_code="200",
        response_message="Success",
        data=Token(access_token="token", expires_at=1700000000),
    )
    decoded = json.loads(json.dumps(res.to_dict()))
    assert decoded["data"]["access_token"] == "token"
    assert decoded["data"]["expires_at"] == 1700000000
    assert decoded["response_code"] == "200"


def test_res_register_with_user():
    res = ResRegister(
        response_code="200",
        response_message="Success",
        data=UserDto(name="Alice", user_name="alice"),
    )
    assert res.to_dict()["data"] == {"name": "Alice", "user_name": "alice"}


def test_res_register_failure_has_no_data():
    res = ResRegister(response_code="500", response_message="Internal server error")
    assert "data" not in res.to_dict()


def test_user_dto_to_dict():
    assert UserDto(name="Bob", user_name="bob").to_dict() == {"name": "Bob", "user_name": "bob"}