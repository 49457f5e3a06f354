"""
Pytest configuration and fixtures for all tests.
"""

import io
import json
import os
import sys

import httpx
import pytest
from openpyxl import Workbook

# Make backend/ importable without an install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../backend'))

# Set up test environment variables before importing any modules
os.environ.setdefault('API_BASE', 'https://verifier.test/api')
os.environ.setdefault('UPSTREAM_BASE', 'https://verifier.test/api')
os.environ.setdefault('LOG_LEVEL', 'INFO')


@pytest.fixture
def anyio_backend():
    return 'asyncio'


def make_xlsx(rows):
    """Build an in-memory .xlsx with a single sheet holding rows."""
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(list(row))
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


class Upstream:
    """Records requests and answers them through a user-supplied handler."""

    def __init__(self, handler):
        self.handler = handler
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return self.handler(request)

    @property
    def call_count(self):
        return len(self.requests)

    def transport(self):
        return httpx.MockTransport(self)


def make_batch_handler(statuses):
    """Answer /validate/batch with the given {email: (status, score)} subset."""

    def handler(request):
        results = [
            {
                'email': email,
                'status': status,
                'score': score,
                'validations': {'syntax': True, 'domain_exists': True},
            }
            for email, (status, score) in statuses.items()
        ]
        return httpx.Response(200, json={'results': results})

    return handler


@pytest.fixture
def batch_handler():
    return make_batch_handler


@pytest.fixture
def xlsx_factory():
    return make_xlsx


@pytest.fixture
def upstream_factory():
    return Upstream


@pytest.fixture
def sent_json():
    def _read(request):
        return json.loads(request.content.decode('utf-8'))
    return _read
