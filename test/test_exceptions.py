"""
Tests for custom exception classes and the global exception handlers

Tests exception initialization, messages, status codes, and the JSON error
body produced for each of them.
"""

import pytest
from fastapi import FastAPI, status
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from vidshare.exception_handlers import get_error_type, register_exception_handlers
from vidshare.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ChannelNotFoundError,
    ConcurrentModificationError,
    DatabaseError,
    DuplicateResourceError,
    InvalidCredentialsError,
    InvalidIdentifierError,
    InvalidTokenError,
    PlaylistNotFoundError,
    ResourceNotFoundError,
    TokenExpiredError,
    UserNotFoundError,
    ValidationError,
    VideoNotFoundError,
    VidShareError,
)


class TestVidShareError:
    """Test base VidShareError class"""

    def test_default(self):
        exc = VidShareError("Test error")
        assert str(exc) == "Test error"
        assert exc.message == "Test error"
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.details == {}

    def test_with_custom_status_and_details(self):
        exc = VidShareError("Test error", status_code=status.HTTP_400_BAD_REQUEST, details={"count": 42})
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.details["count"] == 42


class TestAuthExceptions:
    """Test authentication and authorization exceptions"""

    def test_authentication_error(self):
        exc = AuthenticationError()
        assert str(exc) == "Authentication required"
        assert exc.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_errors_are_authentication_errors(self):
        for exc in (InvalidCredentialsError(), TokenExpiredError(), InvalidTokenError()):
            assert isinstance(exc, AuthenticationError)
            assert exc.status_code == status.HTTP_401_UNAUTHORIZED

    def test_authorization_error_with_details(self):
        exc = AuthorizationError("You need to create a channel first", details={"hasChannel": False})
        assert exc.status_code == status.HTTP_403_FORBIDDEN
        assert exc.details == {"hasChannel": False}


class TestResourceNotFoundExceptions:
    """Test resource not found exceptions"""

    def test_resource_not_found(self):
        exc = ResourceNotFoundError("Thing", "abc")
        assert str(exc) == "Thing not found"
        assert exc.status_code == status.HTTP_404_NOT_FOUND
        assert exc.details == {"resource_type": "Thing", "resource_id": "abc"}

    def test_specific_not_found_errors(self):
        assert str(UserNotFoundError()) == "User not found"
        assert str(VideoNotFoundError()) == "Video not found"
        assert str(ChannelNotFoundError()) == "Channel not found"
        assert str(PlaylistNotFoundError()) == "Playlist not found"


class TestValidationExceptions:
    """Test validation and conflict exceptions"""

    def test_validation_error_with_field(self):
        exc = ValidationError("Bad value", field="title")
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.details["field"] == "title"

    def test_invalid_identifier_error(self):
        exc = InvalidIdentifierError("Video", "123")
        assert str(exc) == "Invalid video ID format"
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.details == {"field": "video_id", "value": "123"}

    def test_duplicate_resource_error(self):
        exc = DuplicateResourceError("User", "email", "a@example.com")
        assert exc.status_code == status.HTTP_409_CONFLICT
        assert "already exists" in str(exc)

    def test_concurrent_modification_error(self):
        exc = ConcurrentModificationError("Video", "abc")
        assert exc.status_code == status.HTTP_409_CONFLICT

    def test_database_error(self):
        exc = DatabaseError(operation="insert")
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.details == {"operation": "insert"}


@pytest.fixture
def error_app() -> FastAPI:
    """Minimal app that raises on demand"""
    test_app = FastAPI()
    register_exception_handlers(test_app)

    @test_app.get("/not-found")
    async def not_found():
        raise VideoNotFoundError("abc")

    @test_app.get("/unauthorized")
    async def unauthorized():
        raise AuthenticationError()

    @test_app.get("/database")
    async def database():
        raise OperationalError("SELECT 1", {}, Exception("connection refused on 10.0.0.5"))

    @test_app.get("/boom")
    async def boom():
        raise RuntimeError("secret internals")

    @test_app.get("/typed/{number}")
    async def typed(number: int):
        return {"number": number}

    return test_app


class TestExceptionHandlers:
    """Test the JSON error bodies"""

    def test_error_types(self):
        assert get_error_type(404) == "Not Found"
        assert get_error_type(418) == "Error"

    @pytest.mark.asyncio
    async def test_vidshare_error_body(self, error_app: FastAPI):
        async with AsyncClient(transport=ASGITransport(app=error_app), base_url="http://test") as client:
            response = await client.get("/not-found")

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["status_code"] == 404
        assert error["error_code"] == "RESOURCE_VIDEO_NOT_FOUND"
        assert error["message"] == "Video not found"
        assert error["type"] == "Not Found"
        assert error["path"] == "/not-found"

    @pytest.mark.asyncio
    async def test_unauthorized_sets_authenticate_header(self, error_app: FastAPI):
        async with AsyncClient(transport=ASGITransport(app=error_app), base_url="http://test") as client:
            response = await client.get("/unauthorized")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_database_error_hides_driver_details(self, error_app: FastAPI):
        async with AsyncClient(transport=ASGITransport(app=error_app), base_url="http://test") as client:
            response = await client.get("/database")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["error_code"] == "DATABASE_ERROR"
        assert "10.0.0.5" not in response.text

    @pytest.mark.asyncio
    async def test_unhandled_error_is_generic(self, error_app: FastAPI):
        transport = ASGITransport(app=error_app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "An unexpected error occurred. Please try again later."
        assert "secret internals" not in response.text

    @pytest.mark.asyncio
    async def test_request_validation_error(self, error_app: FastAPI):
        async with AsyncClient(transport=ASGITransport(app=error_app), base_url="http://test") as client:
            response = await client.get("/typed/not-a-number")

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["error_code"] == "VALIDATION_FAILED"
        assert error["details"]["validation_errors"][0]["field"] == "path.number"

    @pytest.mark.asyncio
    async def test_unknown_route(self, error_app: FastAPI):
        async with AsyncClient(transport=ASGITransport(app=error_app), base_url="http://test") as client:
            response = await client.get("/missing")

        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "RESOURCE_NOT_FOUND"
