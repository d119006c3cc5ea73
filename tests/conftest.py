"""
Pytest configuration for the anti-cheat service tests
"""
from datetime import datetime, timedelta

import jwt
import pytest
from fastapi.testclient import TestClient

from quiz_anticheat.config import settings


@pytest.fixture(scope='session')
def app():
    """FastAPI app (lifespan is not run, so no database connection is made)"""
    from quiz_anticheat.main import app
    return app


@pytest.fixture(scope='function')
def client(app):
    """FastAPI test client"""
    return TestClient(app)


@pytest.fixture(scope='session')
def make_token():
    """Build a signed access token for a given user/role"""
    def _make(user_id='user-1', role='TEACHER', token_type='access', expires_in=3600):
        payload = {
            'user_id': user_id,
            'role': role,
            'type': token_type,
            'iat': datetime.utcnow(),
            'exp': datetime.utcnow() + timedelta(seconds=expires_in),
        }
        return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return _make


@pytest.fixture(scope='function')
def teacher_headers(make_token):
    return {'Authorization': f"Bearer {make_token('teacher-1', 'TEACHER')}"}


@pytest.fixture(scope='function')
def student_headers(make_token):
    return {'Authorization': f"Bearer {make_token('student-1', 'STUDENT')}"}
