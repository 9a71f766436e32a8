"""Signup/login client."""

from pydantic import ValidationError

from cot_game.errors import UNKNOWN_ERROR, RequestFailed
from cot_game.models import LoginResponse
from cot_game.services.transport import ApiClient


class AuthClient:
    def __init__(self, api: ApiClient):
        self.api = api

    def signup(self, username: str, email: str, password: str) -> LoginResponse:
        """Register a new user and return their token."""
        data = self.api.request(
            "/api/signup",
            method="POST",
            json={"username": username, "email": email, "password": password},
        )
        return _login_response(data)

    def login(self, email: str, password: str) -> LoginResponse:
        data = self.api.request(
            "/api/login",
            method="POST",
            json={"email": email, "password": password},
        )
        return _login_response(data)


def _login_response(data) -> LoginResponse:
    try:
        return LoginResponse.model_validate(data)
    except ValidationError as e:
        raise RequestFailed(UNKNOWN_ERROR) from e
