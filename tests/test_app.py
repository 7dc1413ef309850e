from ncd_clinic.models import User


def test_health_endpoints(client):
    assert client.get('/health').get_json()['status'] == 'healthy'
    assert client.get('/health/live').get_json()['status'] == 'alive'

    resp = client.get('/health/ready')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['database'] == 'connected'
    assert body['schema_version'] == '0007_users_password_hash'


def test_unknown_endpoint_is_json_404(client):
    resp = client.get('/api/nothing-here')
    assert resp.status_code == 404
    assert resp.get_json() == {'success': False, 'error': 'Endpoint not found'}


def test_wrong_method_is_json_405(client):
    resp = client.patch('/health')
    assert resp.status_code == 405
    assert resp.get_json()['success'] is False


def test_cli_create_user(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['create-user', 'admin', '--password', 'pw', '--role', 'admin'])
    assert result.exit_code == 0, result.output
    assert 'Created user admin (admin).' in result.output
    assert User.query.filter_by(username='admin').one().check_password('pw')

    result = runner.invoke(args=['create-user', 'admin', '--password', 'pw'])
    assert result.exit_code != 0
    assert 'Username already exists' in result.output


def test_cli_init_db(app):
    result = app.test_cli_runner().invoke(args=['init-db'])
    assert result.exit_code == 0, result.output
    assert 'Database is up to date (revision 0007_users_password_hash).' in result.output
