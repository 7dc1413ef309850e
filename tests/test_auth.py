from ncd_clinic.models import User


def test_signup_hashes_password(client):
    resp = client.post('/api/auth/signup', json={'username': 'hana', 'password': 'pw-1234', 'role': 'doctor'})
    assert resp.status_code == 201
    data = resp.get_json()['data']
    assert data['username'] == 'hana'
    assert data['full_name'] == 'hana'
    assert data['role'] == 'doctor'

    user = User.query.filter_by(username='hana').one()
    assert user.password_hash != 'pw-1234'
    assert user.check_password('pw-1234')


def test_signup_defaults_role_to_staff(client):
    resp = client.post('/api/auth/signup', json={'username': 'dawit', 'password': 'pw', 'full_name': 'Dawit G.'})
    assert resp.get_json()['data']['role'] == 'staff'


def test_signup_duplicate_username(client):
    client.post('/api/auth/signup', json={'username': 'hana', 'password': 'pw'})
    resp = client.post('/api/auth/signup', json={'username': 'hana', 'password': 'other'})
    assert resp.status_code == 400
    assert resp.get_json() == {'success': False, 'error': 'Username already exists'}


def test_signup_requires_credentials(client):
    resp = client.post('/api/auth/signup', json={'username': 'hana'})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Username and password are required'


def test_login_and_me(client):
    client.post('/api/auth/signup', json={'username': 'hana', 'password': 'pw-1234', 'full_name': 'Hana T.'})

    resp = client.post('/api/auth/login', json={'username': 'hana', 'password': 'pw-1234'})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['token_type'] == 'bearer'
    assert body['data']['full_name'] == 'Hana T.'

    me = client.get('/api/auth/me', headers={'Authorization': f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.get_json()['data']['username'] == 'hana'


def test_login_wrong_password(client):
    client.post('/api/auth/signup', json={'username': 'hana', 'password': 'pw-1234'})

    resp = client.post('/api/auth/login', json={'username': 'hana', 'password': 'nope'})
    assert resp.status_code == 401
    assert resp.get_json()['error'] == 'Invalid username or password'

    resp = client.post('/api/auth/login', json={'username': 'ghost', 'password': 'nope'})
    assert resp.status_code == 401
    assert User.query.filter_by(username='ghost').first() is None


def test_invalid_token_is_json_401(client):
    resp = client.get('/api/patients', headers={'Authorization': 'Bearer not-a-token'})
    assert resp.status_code == 401
    assert resp.get_json()['success'] is False
