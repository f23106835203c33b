"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases.
"""

from __future__ import annotations

import os

import pytest
from pawpong.core.config import TestingConfig
from pawpong.core.extensions import db as _db  # Flask-SQLAlchemy instance
from pawpong.factory import create_app  # application factory under test
from pawpong.infra.jwt.token_issuer import JWTTokenIssuer
from pawpong.infra.security.refresh_token_guard import WerkzeugRefreshTokenGuard
from pawpong.services import (
    AuthService,
    BreederVerificationService,
    RegistrationService,
    SocialAuthService,
)
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

TEST_JWT_SECRET = TestingConfig.JWT_SECRET_KEY


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database shared through a static pool.
    - Configures every OAuth provider with dummy credentials so the bridges
      are registered; provider HTTP is mocked with ``responses``.
    - Avoids hitting external services (Redis stays disabled).
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    }
    GOOGLE_CLIENT_ID = "google-client"
    GOOGLE_CLIENT_SECRET = "google-secret"
    GOOGLE_CALLBACK_URL = "http://localhost/api/v1/auth/google/callback"
    NAVER_CLIENT_ID = "naver-client"
    NAVER_CLIENT_SECRET = "naver-secret"
    NAVER_CALLBACK_URL = "http://localhost/api/v1/auth/naver/callback"
    KAKAO_CLIENT_ID = "kakao-client"
    KAKAO_CLIENT_SECRET = "kakao-secret"
    KAKAO_CALLBACK_URL = "http://localhost/api/v1/auth/kakao/callback"
    FRONTEND_URL = "http://frontend.test"
    LOG_LEVEL = "WARNING"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Parameters
    ----------
    app: flask.Flask
        Application fixture providing the engine configuration.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
    yield _db
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(app, db):
    """Keep a dedicated DBAPI connection open for the whole session.

    Yields
    ------
    sqlalchemy.engine.Connection
        Connection reused by nested transactions in each test.
    """
    with app.app_context():
        conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(app, db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection; automatically rolled
        back after each test.

    Notes
    -----
    The fixture mirrors the SQLAlchemy 2.0 pattern for transactional tests: it
    begins a top-level transaction, starts a SAVEPOINT per test, and reinstalls
    the SAVEPOINT whenever SQLAlchemy ends one. Services commit through their
    Unit of Work; those commits only release the session's own SAVEPOINT.
    Each test gets its own application context so ``g`` never carries over.
    """
    with app.app_context():
        # 1) Top-level transaction
        top_trans = connection.begin()

        # 2) Scoped session bound to the connection
        SessionFactory = sessionmaker(bind=connection, join_transaction_mode="create_savepoint")
        scoped = scoped_session(SessionFactory)

        # 3) SAVEPOINT per test
        nested = connection.begin_nested()

        # 4) Re-create SAVEPOINT when the previous nested transaction ends
        @event.listens_for(scoped(), "after_transaction_end")
        def _restart_savepoint(sess, trans):  # pragma: no cover
            if trans.nested and not trans._parent.nested:
                nonlocal nested
                nested = connection.begin_nested()

        # 5) Monkey-patch db.session so app code uses this scoped session
        original_session = db.session
        db.session.remove()
        db.session = scoped

        try:
            yield scoped
        finally:
            scoped.remove()
            db.session = original_session
            top_trans.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker("ko_KR")
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


# -- Service wiring ------------------------------------------------------------
@pytest.fixture()
def token_issuer() -> JWTTokenIssuer:
    """Issuer sharing the secret the API verifies bearer tokens with."""
    return JWTTokenIssuer(secret=TEST_JWT_SECRET)


@pytest.fixture()
def refresh_guard() -> WerkzeugRefreshTokenGuard:
    """Guard with a cheap hash method so the suite stays fast."""
    return WerkzeugRefreshTokenGuard(method=TestingConfig.REFRESH_TOKEN_HASH_METHOD)


@pytest.fixture()
def auth_service(token_issuer, refresh_guard) -> AuthService:
    return AuthService(token_issuer=token_issuer, refresh_hasher=refresh_guard)


@pytest.fixture()
def social_service(auth_service, token_issuer) -> SocialAuthService:
    return SocialAuthService(sessions=auth_service, token_issuer=token_issuer)


@pytest.fixture()
def registration_service(auth_service) -> RegistrationService:
    return RegistrationService(sessions=auth_service)


@pytest.fixture()
def verification_service() -> BreederVerificationService:
    return BreederVerificationService()


# -- HTTP ----------------------------------------------------------------------
@pytest.fixture()
def client(app, session):
    """Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture()
def auth_headers(token_issuer):
    """Build ``Authorization`` headers carrying an access token for an account."""

    def _build(account_id: int | str, role: str, email: str = "user@example.com") -> dict[str, str]:
        token = token_issuer.issue(account_id, email, role).access_token
        return {"Authorization": f"Bearer {token}"}

    return _build
