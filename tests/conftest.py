"""Test configuration and fixtures for the admin console."""

import itertools
from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from blogdesk import create_app
from blogdesk.models import AdminSession
from blogdesk.services.auth import SESSION_KEY
from blogdesk.utils.http_client import RemoteError


def _rows(rows):
    return [dict(r) for r in rows]


SEED_POSTS = [
    {'id': 1, 'title': 'Hello World', 'content': 'First post body', 'category': 'News',
     'created_at': '2024-05-01T10:00:00+00:00', 'views': 12, 'image_url': 'https://img.example/1.jpg'},
    {'id': 2, 'title': 'Second Take', 'content': 'Second post body', 'category': 'Tech',
     'created_at': '2024-05-03T10:00:00+00:00', 'views': 5, 'image_url': 'https://img.example/2.jpg'},
    {'id': 3, 'title': 'Deep Dive', 'content': 'Third post body', 'category': 'Tech',
     'created_at': '2024-05-02T10:00:00+00:00', 'views': 40, 'image_url': 'https://img.example/3.jpg'},
]

SEED_CATEGORIES = [
    {'id': 1, 'name': 'News', 'created_at': '2024-04-01T00:00:00+00:00'},
    {'id': 2, 'name': 'Tech', 'created_at': '2024-04-01T00:00:00+00:00'},
    {'id': 3, 'name': 'Empty', 'created_at': '2024-04-01T00:00:00+00:00'},
]

SEED_COMMENTS = [
    {'id': 1, 'post_id': 1, 'author': 'Ana', 'content': 'Great post',
     'created_at': '2024-05-04T08:00:00+00:00', 'admin_reply': None},
    {'id': 2, 'post_id': 2, 'author': 'Budi', 'content': 'Thanks for this',
     'created_at': '2024-05-05T08:00:00+00:00', 'admin_reply': None},
]

# Ten days of counters; only the last seven should ever be shown
SEED_POST_VIEWS = [
    {'date': f'2024-05-{day:02d}', 'views': day * 10} for day in range(1, 11)
]

ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'correct-horse-battery'


class FakeRemoteStore:
    """In-memory stand-in for the hosted REST and auth gateways.

    Every call is recorded in ``calls``. Put a table name, an
    ``(operation, table)`` pair, or one of ``auth``/``refresh``/``sign_out``
    into ``fail`` to make matching calls raise ``RemoteError``.
    """

    def __init__(self):
        self.tables = {
            'posts': _rows(SEED_POSTS),
            'categories': _rows(SEED_CATEGORIES),
            'comments': _rows(SEED_COMMENTS),
            'post_views': _rows(SEED_POST_VIEWS),
        }
        self.calls: list[tuple] = []
        self.fail: set = set()
        self.ignore_order = False
        self.users = {ADMIN_EMAIL: ADMIN_PASSWORD}
        self.valid_tokens = {'token-seed'}
        self.valid_refresh_tokens = {'refresh-seed'}
        self._ids = itertools.count(100)
        self.base_url = 'https://project.backend.test/'

    def _check(self, operation, table):
        self.calls.append((operation, table))
        if table in self.fail or (operation, table) in self.fail:
            raise RemoteError('simulated failure', status_code=500)

    @staticmethod
    def _matches(row, match):
        return all(row.get(k) == v for k, v in (match or {}).items())

    def select(self, table, *, columns='*', order=None, ascending=True, limit=None, filters=None, token=None):
        self._check('select', table)
        rows = [r for r in self.tables[table] if self._matches(r, filters)]
        if order and not self.ignore_order:
            rows = sorted(rows, key=lambda r: r[order], reverse=not ascending)
        if limit is not None:
            rows = rows[:limit]
        if columns != '*':
            names = columns.split(',')
            rows = [{c: r.get(c) for c in names} for r in rows]
        return _rows(rows)

    def insert(self, table, rows, *, token=None):
        self._check('insert', table)
        created = []
        for row in rows:
            new = {'id': next(self._ids), 'created_at': '2024-06-01T12:00:00+00:00', **row}
            self.tables[table].append(new)
            created.append(dict(new))
        return created

    def update(self, table, values, *, match, token=None):
        self._check('update', table)
        updated = []
        for row in self.tables[table]:
            if self._matches(row, match):
                row.update(values)
                updated.append(dict(row))
        return updated

    def delete(self, table, *, match, token=None):
        self._check('delete', table)
        removed = [r for r in self.tables[table] if self._matches(r, match)]
        self.tables[table] = [r for r in self.tables[table] if not self._matches(r, match)]
        return _rows(removed)

    def _token_response(self, email):
        n = next(self._ids)
        access, refresh = f'token-{n}', f'refresh-{n}'
        self.valid_tokens.add(access)
        self.valid_refresh_tokens.add(refresh)
        return {
            'access_token': access,
            'refresh_token': refresh,
            'expires_at': 4102444800,
            'user': {'id': 'user-1', 'email': email},
        }

    def sign_in_with_password(self, email, password):
        self.calls.append(('sign_in', email))
        if 'auth' in self.fail:
            raise RemoteError('service unavailable', status_code=503)
        if self.users.get(email) != password:
            raise RemoteError('Invalid login credentials', status_code=400)
        return self._token_response(email)

    def refresh_session(self, refresh_token):
        self.calls.append(('refresh', None))
        if 'refresh' in self.fail or refresh_token not in self.valid_refresh_tokens:
            raise RemoteError('Invalid Refresh Token', status_code=400)
        self.valid_refresh_tokens.discard(refresh_token)
        return self._token_response(ADMIN_EMAIL)

    def get_user(self, access_token):
        self.calls.append(('get_user', None))
        if 'auth' in self.fail:
            raise RemoteError('service unavailable', status_code=503)
        if access_token not in self.valid_tokens:
            raise RemoteError('invalid JWT', status_code=401)
        return {'id': 'user-1', 'email': ADMIN_EMAIL}

    def sign_out(self, access_token):
        self.calls.append(('sign_out', None))
        if 'sign_out' in self.fail:
            raise RemoteError('service unavailable', status_code=503)
        self.valid_tokens.discard(access_token)

    def health(self):
        self.calls.append(('health', None))
        if 'auth' in self.fail:
            raise RemoteError('service unavailable', status_code=503)
        return {'name': 'GoTrue', 'version': 'v2.0.0'}

    def writes(self):
        return [c for c in self.calls if c[0] in ('insert', 'update', 'delete')]


@pytest.fixture
def store() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def app(store: FakeRemoteStore) -> Generator[Flask, None, None]:
    """Create and configure a test Flask application."""
    test_config = {
        'TESTING': True,
        'WTF_CSRF_ENABLED': False,  # Disable CSRF for testing
        'SECRET_KEY': 'test-secret-key',
        'SUPABASE_URL': 'https://project.backend.test',
        'SUPABASE_ANON_KEY': 'anon-key',
        'RATELIMIT_ENABLED': False,  # Disable rate limiting for tests
        'CACHE_TYPE': 'SimpleCache',
        'CACHE_DEFAULT_TIMEOUT': 300,
        'WEB_CONCURRENCY': 1,
        'SESSION_COOKIE_SECURE': False,
    }

    app = create_app(test_config)
    app.extensions['remote_store'] = store

    with app.app_context():
        yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def runner(app: Flask):
    """Create a test CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def admin() -> AdminSession:
    """A provider session the fake store accepts."""
    return AdminSession(
        user_id='user-1',
        email=ADMIN_EMAIL,
        access_token='token-seed',
        refresh_token='refresh-seed',
        expires_at=4102444800,
    )


@pytest.fixture
def authenticated_client(client: FlaskClient, admin: AdminSession) -> FlaskClient:
    """Create a client with a signed-in admin session."""
    with client.session_transaction() as sess:
        sess[SESSION_KEY] = admin.to_dict()
        sess['_user_id'] = admin.user_id
        sess['_fresh'] = True
    return client


class AuthActions:
    """Helper class for authentication actions in tests."""

    def __init__(self, client: FlaskClient):
        self._client = client

    def login(self, email: str = ADMIN_EMAIL, password: str = ADMIN_PASSWORD, **kwargs):
        return self._client.post('/auth/login', data={
            'email': email,
            'password': password
        }, **kwargs)

    def logout(self, **kwargs):
        return self._client.post('/auth/logout', **kwargs)


@pytest.fixture
def auth(client: FlaskClient) -> AuthActions:
    """Authentication helper fixture."""
    return AuthActions(client)
