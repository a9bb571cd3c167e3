import os
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Keep unit runs hermetic: never pick up real provider credentials from the shell.
for _var in (
    "RESEND_API_KEY",
    "SMTP_HOST",
    "CLOUDINARY_CLOUD_NAME",
    "CLOUDINARY_API_KEY",
    "CLOUDINARY_API_SECRET",
    "EMAIL_TEMPLATE_DIR",
):
    os.environ.pop(_var, None)
os.environ.setdefault("EMAIL_PROVIDER", "resend")

import cms.db.database as db_module
from cms.db import models
from cms.api.main import app
from cms.api import deps
from cms.services import reset_media_upload_service_for_tests, reset_transactional_email_service_for_tests

_current_session = None


@pytest.fixture(autouse=True)
def db_session():
    """Fresh schema per test on the shared in-memory SQLite engine."""
    global _current_session
    engine = db_module.engine
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)
    session = db_module.SessionLocal()
    _current_session = session
    try:
        yield session
    finally:
        _current_session = None
        session.close()


def _override_get_db():
    if _current_session is not None:
        yield _current_session
        return
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()


app.dependency_overrides[db_module.get_db] = _override_get_db


@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture(autouse=True)
def _reset_service_singletons():
    reset_media_upload_service_for_tests()
    reset_transactional_email_service_for_tests()
    yield
    reset_media_upload_service_for_tests()
    reset_transactional_email_service_for_tests()


@pytest.fixture
def fake_media():
    """Media service double with a configured config and recorded calls."""
    media = MagicMock(name="MediaUploadService")
    media.config.is_configured.return_value = True
    media.delete_file.return_value = True
    return media


@pytest.fixture
def fake_email():
    email = MagicMock(name="TransactionalEmailService")
    email.status.return_value = {"provider": "resend", "configured": True, "errors": []}
    return email


@pytest.fixture
def client(fake_media, fake_email):
    app.dependency_overrides[deps.get_media_service] = lambda: fake_media
    app.dependency_overrides[deps.get_email_service] = lambda: fake_email
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(deps.get_media_service, None)
        app.dependency_overrides.pop(deps.get_email_service, None)


