from datetime import date

from ncd_clinic.extensions import db
from ncd_clinic.models import Patient


def _patient_type(patient_id):
    db.session.expire_all()
    return db.session.get(Patient, patient_id).patient_type


def test_first_visit_marks_patient_repeat(api, make_patient, make_visit):
    patient = make_patient()
    assert _patient_type(patient['id']) == 'New'

    make_visit(patient['id'], systolic_bp=150, diastolic_bp=95)
    assert _patient_type(patient['id']) == 'Repeat'

    make_visit(patient['id'])
    assert _patient_type(patient['id']) == 'Repeat'


def test_backfilled_visit_still_marks_repeat(api, make_patient, make_visit):
    patient = make_patient()
    visit = make_visit(patient['id'], visit_date='2019-06-30')
    assert visit['visit_date'] == '2019-06-30'
    assert _patient_type(patient['id']) == 'Repeat'


def test_visit_date_defaults_to_today(make_patient, make_visit):
    patient = make_patient()
    visit = make_visit(patient['id'])
    assert visit['visit_date'] == date.today().isoformat()


def test_empty_strings_become_null_and_zero_is_kept(make_patient, make_visit):
    patient = make_patient()
    visit = make_visit(
        patient['id'],
        systolic_bp='',
        diastolic_bp='80',
        heart_rate=0,
        temperature='36.6',
        blood_sugar_level='',
        hba1c=0.0,
        urinalysis='',
        notes='Stable on amlodipine',
    )
    assert visit['systolic_bp'] is None
    assert visit['diastolic_bp'] == 80
    assert visit['heart_rate'] == 0
    assert visit['temperature'] == 36.6
    assert visit['blood_sugar_level'] is None
    assert visit['hba1c'] == 0.0
    assert visit['urinalysis'] is None
    assert visit['notes'] == 'Stable on amlodipine'
    assert visit['weight'] is None


def test_create_visit_validation(api, make_patient):
    patient = make_patient()

    resp = api.post('/api/visits', json={'systolic_bp': 120})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Field "patient_id" is required'

    resp = api.post('/api/visits', json={'patient_id': patient['id'], 'heart_rate': 'fast'})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Field "heart_rate" must be a whole number'

    resp = api.post('/api/visits', json={'patient_id': patient['id'], 'weight': 'heavy'})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Field "weight" must be a number'

    resp = api.post('/api/visits', json={'patient_id': patient['id'], 'visit_date': '31/12/2024'})
    assert resp.status_code == 400

    # a rejected visit must not mark the patient
    assert _patient_type(patient['id']) == 'New'


def test_non_finite_numbers_are_rejected(api, make_patient):
    patient = make_patient()

    for field, value in (('blood_sugar_level', 'nan'), ('weight', 'inf'), ('hba1c', '-Infinity')):
        resp = api.post('/api/visits', json={'patient_id': patient['id'], field: value})
        assert resp.status_code == 400, field
        assert resp.get_json()['error'] == f'Field "{field}" must be a number'

    assert api.get('/api/visits', query_string={'patient_id': patient['id']}).get_json()['data'] == []


def test_create_visit_for_unknown_patient(api):
    resp = api.post('/api/visits', json={'patient_id': 404, 'systolic_bp': 120})
    assert resp.status_code == 404
    assert resp.get_json() == {'success': False, 'error': 'Patient not found'}


def test_get_and_list_visits(api, make_patient, make_visit):
    abebe = make_patient(name='Abebe')
    almaz = make_patient(name='Almaz', gender='Female')
    first = make_visit(abebe['id'], visit_date='2025-02-01')
    make_visit(almaz['id'], visit_date='2025-03-15')
    make_visit(abebe['id'], visit_date='2025-03-20')

    resp = api.get(f"/api/visits/{first['id']}")
    assert resp.status_code == 200
    assert resp.get_json()['data']['patient_name'] == 'Abebe'

    all_visits = api.get('/api/visits').get_json()['data']
    assert [v['visit_date'] for v in all_visits] == ['2025-03-20', '2025-03-15', '2025-02-01']

    abebe_visits = api.get('/api/visits', query_string={'patient_id': abebe['id']}).get_json()['data']
    assert {v['patient_id'] for v in abebe_visits} == {abebe['id']}
    assert len(abebe_visits) == 2

    march = api.get('/api/visits', query_string={'month': 3, 'year': 2025}).get_json()['data']
    assert [v['patient_name'] for v in march] == ['Abebe', 'Almaz']

    assert api.get('/api/visits/999').status_code == 404
    assert api.get('/api/visits', query_string={'patient_id': 'x'}).status_code == 400


def test_update_visit(api, make_patient, make_visit):
    patient = make_patient()
    visit = make_visit(patient['id'], visit_date='2025-02-01', systolic_bp=160, notes='high')

    resp = api.put(f"/api/visits/{visit['id']}", json={
        'visit_date': '2025-02-02',
        'systolic_bp': '138',
        'notes': '',
        'patient_id': 12345,
    })
    assert resp.status_code == 200
    data = resp.get_json()['data']
    assert data['visit_date'] == '2025-02-02'
    assert data['systolic_bp'] == 138
    assert data['notes'] is None
    assert data['patient_id'] == patient['id']

    assert api.put('/api/visits/999', json={'systolic_bp': 120}).status_code == 404


def test_delete_visit_keeps_repeat_status(api, make_patient, make_visit):
    patient = make_patient()
    visit = make_visit(patient['id'])

    resp = api.delete(f"/api/visits/{visit['id']}")
    assert resp.status_code == 200
    assert resp.get_json()['success'] is True

    assert api.get(f"/api/patients/{patient['id']}/visits").get_json()['data'] == []
    assert _patient_type(patient['id']) == 'Repeat'


def test_delete_missing_visit_is_not_found(api):
    resp = api.delete('/api/visits/12345')
    assert resp.status_code == 404
    assert resp.get_json() == {'success': False, 'error': 'Visit not found'}


def test_delete_visit_with_malformed_id(api):
    resp = api.delete('/api/visits/abc')
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Invalid visit ID'
