import pytest

from ncd_clinic import create_app
from ncd_clinic.extensions import db


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(client):
    """Bearer token for a freshly signed-up staff account"""
    client.post('/api/auth/signup', json={
        'username': 'nurse',
        'password': 'secret-pass',
        'full_name': 'Tigist Nurse',
    })
    resp = client.post('/api/auth/login', json={'username': 'nurse', 'password': 'secret-pass'})
    token = resp.get_json()['access_token']
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def api(client, auth_headers):
    """Test client wrapper that sends the auth header on every call"""
    class Api:
        def get(self, url, **kwargs):
            return client.get(url, headers=auth_headers, **kwargs)

        def post(self, url, **kwargs):
            return client.post(url, headers=auth_headers, **kwargs)

        def put(self, url, **kwargs):
            return client.put(url, headers=auth_headers, **kwargs)

        def delete(self, url, **kwargs):
            return client.delete(url, headers=auth_headers, **kwargs)

    return Api()


def patient_payload(**overrides):
    data = {
        'name': 'Abebe Kebede',
        'age': 45,
        'gender': 'Male',
        'contact': '0911000000',
        'conditions': 'Hypertension, Diabetes',
        'region': 'Oromia',
        'zone': 'East Shewa',
        'woreda': 'Adama',
        'kebele': '05',
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_patient(api):
    def _make(**overrides):
        resp = api.post('/api/patients', json=patient_payload(**overrides))
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()['data']
    return _make


@pytest.fixture
def make_visit(api):
    def _make(patient_id, **fields):
        fields['patient_id'] = patient_id
        resp = api.post('/api/visits', json=fields)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()['data']
    return _make


@pytest.fixture
def patient_data():
    return patient_payload
