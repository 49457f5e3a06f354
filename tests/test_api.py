import httpx
import pytest
from fastapi.testclient import TestClient

from emailcheck.deps import get_client, get_store
from emailcheck.main import app
from emailcheck.services.client import ValidationClient
from emailcheck.services.storage import ArtifactStore
from emailcheck.services.writer import XLSX_MEDIA_TYPE

XLSX = XLSX_MEDIA_TYPE


@pytest.fixture
def store():
    return ArtifactStore()


@pytest.fixture
def api(store):
    state = {'upstream': None}

    def client_override():
        return ValidationClient('https://verifier.test/api', transport=state['upstream'].transport())

    app.dependency_overrides[get_client] = client_override
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as client:
        client.state = state
        yield client
    app.dependency_overrides.clear()


def upload(api, content, filename='people.xlsx', session=None):
    headers = {'X-Session-Id': session} if session else {}
    return api.post(
        '/uploads/create',
        files={'file': (filename, content, XLSX)},
        headers=headers,
    )


def test_health(api):
    assert api.get('/health').json() == {'status': 'ok'}


def test_single_validation(api, upstream_factory):
    api.state['upstream'] = upstream_factory(
        lambda req: httpx.Response(200, json={'email': 'a@x.com', 'status': 'RISKY', 'score': 55})
    )

    res = api.get('/validate', params={'email': '  a@x.com  '})

    assert res.status_code == 200
    body = res.json()
    assert body['status'] == 'RISKY'
    assert body['score'] == 55
    assert body['validations']['syntax'] is None
    assert api.state['upstream'].requests[0].url.params['email'] == 'a@x.com'


def test_single_validation_requires_email(api, upstream_factory):
    api.state['upstream'] = upstream_factory(lambda req: httpx.Response(200, json={}))

    res = api.get('/validate', params={'email': '   '})

    assert res.status_code == 400
    assert res.json()['detail'] == 'Please enter an email address.'
    assert api.state['upstream'].call_count == 0


def test_single_validation_upstream_error(api, upstream_factory):
    api.state['upstream'] = upstream_factory(lambda req: httpx.Response(503))

    res = api.get('/validate', params={'email': 'a@x.com'})

    assert res.status_code == 502
    assert res.json()['detail'] == 'Request failed (503)'


def test_single_error_leaves_batch_state_alone(api, store, upstream_factory, batch_handler, xlsx_factory):
    api.state['upstream'] = upstream_factory(batch_handler({'a@x.com': ('VALID', 90)}))
    assert upload(api, xlsx_factory([['Email'], ['a@x.com']])).status_code == 200

    api.state['upstream'] = upstream_factory(lambda req: httpx.Response(500))
    assert api.get('/validate', params={'email': 'b@x.com'}).status_code == 502

    assert api.get('/results/download').status_code == 200


def test_batch_upload_and_download(api, upstream_factory, batch_handler, xlsx_factory):
    api.state['upstream'] = upstream_factory(batch_handler({'a@x.com': ('VALID', 90)}))
    content = xlsx_factory([['Name', 'Email'], ['A', 'a@x.com'], ['B', ''], ['C', 'a@x.com']])

    res = upload(api, content)

    assert res.status_code == 200
    body = res.json()
    assert body['filename'] == 'people.xlsx'
    assert body['download_url'] == '/results/download'
    assert body['summary'] == {
        'total_rows': 3,
        'unique_emails': 1,
        'valid_count': 2,
        'invalid_count': 0,
        'other_count': 0,
        'email_column_used': 'Email',
    }

    download = api.get('/results/download')
    assert download.status_code == 200
    assert download.headers['content-type'] == XLSX
    assert 'validated_emails.xlsx' in download.headers['content-disposition']

    status = api.get('/uploads/status').json()
    assert status['running'] is False
    assert status['download_ready'] is True


def test_batch_rejects_other_extensions(api, upstream_factory):
    api.state['upstream'] = upstream_factory(lambda req: httpx.Response(200, json={}))

    res = upload(api, b'email\na@x.com\n', filename='people.csv')

    assert res.status_code == 400


def test_batch_unreadable_file(api, upstream_factory):
    api.state['upstream'] = upstream_factory(lambda req: httpx.Response(200, json={}))

    res = upload(api, b'not a workbook')

    assert res.status_code == 422
    assert 'valid Excel' in res.json()['detail']


def test_batch_no_emails(api, upstream_factory, xlsx_factory):
    api.state['upstream'] = upstream_factory(lambda req: httpx.Response(200, json={}))

    res = upload(api, xlsx_factory([['Email'], ['']]))

    assert res.status_code == 422
    assert res.json()['detail'] == 'No emails found in the sheet.'
    assert api.state['upstream'].call_count == 0


def test_batch_transport_failure(api, upstream_factory, xlsx_factory):
    def boom(request):
        raise httpx.ConnectTimeout('timed out', request=request)

    api.state['upstream'] = upstream_factory(boom)

    res = upload(api, xlsx_factory([['Email'], ['a@x.com']]))

    assert res.status_code == 503
    assert api.get('/uploads/status').json()['running'] is False


def test_new_batch_releases_previous_artifact(api, upstream_factory, batch_handler, xlsx_factory):
    api.state['upstream'] = upstream_factory(batch_handler({'a@x.com': ('VALID', 90)}))
    assert upload(api, xlsx_factory([['Email'], ['a@x.com']])).status_code == 200

    api.state['upstream'] = upstream_factory(lambda req: httpx.Response(500))
    assert upload(api, xlsx_factory([['Email'], ['a@x.com']])).status_code == 502

    assert api.get('/results/download').status_code == 404


def test_double_submit_is_rejected(api, store, upstream_factory, batch_handler, xlsx_factory):
    api.state['upstream'] = upstream_factory(batch_handler({}))
    store.begin('default', 'first.xlsx')

    res = upload(api, xlsx_factory([['Email'], ['a@x.com']]))

    assert res.status_code == 409
    assert api.state['upstream'].call_count == 0


def test_sessions_are_isolated(api, upstream_factory, batch_handler, xlsx_factory):
    api.state['upstream'] = upstream_factory(batch_handler({'a@x.com': ('VALID', 90)}))
    assert upload(api, xlsx_factory([['Email'], ['a@x.com']]), session='alice').status_code == 200

    assert api.get('/results/download', headers={'X-Session-Id': 'alice'}).status_code == 200
    assert api.get('/results/download', headers={'X-Session-Id': 'bob'}).status_code == 404


def test_release_download(api, upstream_factory, batch_handler, xlsx_factory):
    api.state['upstream'] = upstream_factory(batch_handler({'a@x.com': ('VALID', 90)}))
    upload(api, xlsx_factory([['Email'], ['a@x.com']]))

    assert api.delete('/results/download').status_code == 204
    assert api.get('/results/download').status_code == 404


def test_status_and_download_reads_do_not_grow_store(api, store):
    for i in range(20):
        headers = {'X-Session-Id': f'visitor-{i}'}
        assert api.get('/uploads/status', headers=headers).json()['running'] is False
        assert api.get('/results/download', headers=headers).status_code == 404
        assert api.delete('/results/download', headers=headers).status_code == 204

    assert store.sessions == {}
