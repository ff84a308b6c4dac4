"""Unit tests for email, login-status, password and token operations."""
import pytest

from authing_admin.core.management import (
    AuthService,
    ClientCredentialInput,
    EmailScene,
    GetAccessTokenByClientCredentialsRequest,
    ValidateTokenRequest,
    check_login_status_by_token,
    is_password_valid,
    send_email,
)
from authing_admin.core.management.exceptions import AuthingAPIError, AuthingDecodeError


def test_send_email(client, fake_http):
    fake_http.on_graphql("sendEmail", {"data": {"sendEmail": {"message": "发送成功", "code": 200}}})

    result = send_email(client, "alice@example.com", EmailScene.RESET_PASSWORD)

    [call] = fake_http.calls_for("sendEmail")
    assert call.json["query"].startswith("mutation sendEmail")
    assert call.json["variables"] == {"email": "alice@example.com", "scene": "RESET_PASSWORD"}
    assert result.code == 200
    assert result.message == "发送成功"


def test_send_email_accepts_scene_string(client, fake_http):
    fake_http.on_graphql("sendEmail", {"data": {"sendEmail": {"message": "ok", "code": 200}}})

    AuthService(client).send_email("bob@example.com", "VERIFY_EMAIL")

    assert fake_http.calls_for("sendEmail")[0].json["variables"]["scene"] == "VERIFY_EMAIL"


def test_send_email_rejects_unknown_scene(client, fake_http):
    with pytest.raises(ValueError):
        AuthService(client).send_email("bob@example.com", "SPAM")
    assert fake_http.calls_for("sendEmail") == []


def test_send_email_error(client, fake_http):
    fake_http.on_graphql("sendEmail", {"data": None, "errors": [{"message": {"code": 2001, "message": "邮箱格式不正确"}}]})

    with pytest.raises(AuthingAPIError, match="邮箱格式不正确"):
        AuthService(client).send_email("not-an-email", EmailScene.VERIFY_EMAIL)


def test_check_login_status_by_token(client, fake_http):
    fake_http.on_graphql(
        "checkLoginStatus",
        {
            "data": {
                "checkLoginStatus": {
                    "code": 200,
                    "message": "已登录",
                    "status": True,
                    "exp": 1700000000,
                    "iat": 1690000000,
                    "data": {"id": "u1", "userPoolId": "pool-1", "arn": "arn:cn:authing:user:u1"},
                }
            }
        },
    )

    status = check_login_status_by_token(client, "user-jwt")

    assert fake_http.calls_for("checkLoginStatus")[0].json["variables"] == {"token": "user-jwt"}
    assert status.status is True
    assert status.exp == 1700000000
    assert status.data.user_pool_id == "pool-1"


def test_check_login_status_logged_out(client, fake_http):
    fake_http.on_graphql("checkLoginStatus", {"data": {"checkLoginStatus": {"code": 2206, "message": "登录信息已过期", "status": False}}})

    status = AuthService(client).check_login_status_by_token("stale")

    assert status.status is False
    assert status.code == 2206
    assert status.data is None


def test_is_password_valid(client, fake_http):
    fake_http.on("POST", "/api/v2/password/check", {"code": 200, "message": "", "data": {"valid": False, "message": "密码强度不足"}})

    result = is_password_valid(client, "123")

    [call] = fake_http.api_calls
    assert call.json == {"password": "123"}
    assert result.valid is False
    assert result.message == "密码强度不足"


def test_is_password_valid_non_200(client, fake_http):
    fake_http.on("POST", "/api/v2/password/check", {"code": 500, "message": "internal error", "data": {"valid": True}})

    with pytest.raises(AuthingAPIError, match="internal error"):
        AuthService(client).is_password_valid("Str0ng!Pass")


def test_validate_access_token(client, fake_http):
    claims = {"sub": "u1", "aud": "app", "exp": 1700000000}
    fake_http.on("GET", "/api/v2/oidc/validate_token", claims)

    result = AuthService(client).validate_token(ValidateTokenRequest(access_token="at"))

    [call] = fake_http.api_calls
    assert call.params == {"access_token": "at"}
    assert result == claims


def test_validate_id_token(client, fake_http):
    fake_http.on("GET", "/api/v2/oidc/validate_token", {"sub": "u1"})

    AuthService(client).validate_token(ValidateTokenRequest(id_token="it"))

    assert fake_http.api_calls[0].params == {"id_token": "it"}


@pytest.mark.parametrize(
    "request_",
    [ValidateTokenRequest(), ValidateTokenRequest(access_token="at", id_token="it")],
)
def test_validate_token_requires_exactly_one_token(client, fake_http, request_):
    with pytest.raises(ValueError):
        AuthService(client).validate_token(request_)
    assert fake_http.calls == []


def test_validate_token_rejected(client, fake_http):
    fake_http.on("GET", "/api/v2/oidc/validate_token", {"code": 400, "message": "token 不合法"})

    with pytest.raises(AuthingAPIError, match="token 不合法"):
        AuthService(client).validate_token(ValidateTokenRequest(access_token="bogus"))


def test_validate_token_non_object(client, fake_http):
    fake_http.on("GET", "/api/v2/oidc/validate_token", b'"ok"')

    with pytest.raises(AuthingDecodeError):
        AuthService(client).validate_token(ValidateTokenRequest(access_token="at"))


def test_client_credentials_grant(client, fake_http):
    fake_http.on("POST", "/oidc/token", {"access_token": "cc-token", "expires_in": 3600, "scope": "openid", "token_type": "Bearer"})
    request = GetAccessTokenByClientCredentialsRequest(
        scope="openid",
        client_credential_input=ClientCredentialInput(access_key="ak", secret_key="sk"),
    )

    result = AuthService(client).get_access_token_by_client_credentials(request)

    [call] = fake_http.api_calls
    assert call.data == {
        "client_id": "ak",
        "client_secret": "sk",
        "grant_type": "client_credentials",
        "scope": "openid",
    }
    assert result["access_token"] == "cc-token"


def test_client_credentials_oauth_error(client, fake_http):
    fake_http.on("POST", "/oidc/token", {"error": "invalid_client", "error_description": "client authentication failed"})
    request = GetAccessTokenByClientCredentialsRequest(
        scope="openid",
        client_credential_input=ClientCredentialInput(access_key="ak", secret_key="wrong"),
    )

    with pytest.raises(AuthingAPIError, match="client authentication failed"):
        AuthService(client).get_access_token_by_client_credentials(request)


@pytest.mark.parametrize(
    "request_",
    [
        GetAccessTokenByClientCredentialsRequest(scope="", client_credential_input=ClientCredentialInput("ak", "sk")),
        GetAccessTokenByClientCredentialsRequest(scope="openid"),
    ],
)
def test_client_credentials_requires_scope_and_credentials(client, fake_http, request_):
    with pytest.raises(ValueError):
        AuthService(client).get_access_token_by_client_credentials(request_)
    assert fake_http.calls == []


def test_is_password_valid_rejects_non_object_data(client, fake_http):
    fake_http.on("POST", "/api/v2/password/check", {"code": 200, "data": [True]})

    with pytest.raises(AuthingDecodeError, match="PasswordCheckResult"):
        is_password_valid(client, "hunter2")


def test_check_login_status_rejects_non_object_detail(client, fake_http):
    fake_http.on_graphql("checkLoginStatus", {"data": {"checkLoginStatus": {"status": True, "data": "u1"}}})

    with pytest.raises(AuthingDecodeError, match="JWTTokenStatusDetail"):
        check_login_status_by_token(client, "user-token")
