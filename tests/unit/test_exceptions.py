from fastapi import HTTPException
import pytest

from meetcal.core.exceptions import (
    AlreadyMemberException,
    PersistenceException,
    UnauthorizedException,
    handle_domain_exception,
)


@pytest.mark.parametrize(
    "exc, status_code, code",
    [
        (AlreadyMemberException(1, "01JNXXXXXXXXXXXXXXXXXXXXXX"), 409, "ALREADY_MEMBER"),
        (PersistenceException(), 500, "PERSISTENCE_ERROR"),
        (UnauthorizedException(), 401, "UNAUTHORIZED"),
    ],
)
def test_handle_domain_exception_uses_subclass_status(exc, status_code, code):
    with pytest.raises(HTTPException) as exc_info:
        handle_domain_exception(exc)

    assert exc_info.value.status_code == status_code
    assert exc_info.value.detail["code"] == code


def test_unauthorized_carries_bearer_challenge():
    exc = UnauthorizedException("Not authenticated", code="NOT_AUTHENTICATED")
    http_exc = exc.to_http_exception()
    assert http_exc.headers == {"WWW-Authenticate": "Bearer"}
    assert http_exc.detail["message"] == "Not authenticated"
