from datetime import date, timedelta

from academy.models import UserRole


def test_suggest_candidates_endpoint(client, factory):
    student = factory.student(software=['Photoshop'])
    factory.orient(student)
    # The endpoint uses the real clock as its reference date
    factory.payment(student, 5000, date.today() - timedelta(days=1))
    batch = factory.batch()

    response = client.get(f'/batches/{batch.id}/candidates/suggest')

    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'success'
    assert body['data']['totalCount'] == 1
    assert body['data']['candidates'][0]['status'] == 'fees_overdue'
    assert body['data']['candidates'][0]['statusMessage'] == 'Fees overdue (₹5000.00)'


def test_suggest_candidates_invalid_id(client):
    response = client.get('/batches/abc/candidates/suggest')

    assert response.status_code == 400
    assert response.get_json() == {'status': 'error', 'message': 'Invalid batch ID'}


def test_suggest_candidates_unknown_batch(client):
    response = client.get('/batches/404/candidates/suggest')

    assert response.status_code == 404
    assert response.get_json()['message'] == 'Batch not found'


def test_suggest_candidates_batch_without_software(client, factory):
    batch = factory.batch(software='   ')

    response = client.get(f'/batches/{batch.id}/candidates/suggest')

    assert response.status_code == 400
    assert 'software' in response.get_json()['message']


def test_student_orientation(client, factory):
    student = factory.student()
    factory.orient(student, accepted=True, language='gujarati')

    response = client.get(f'/orientation/{student.id}')

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['isEligible'] is True
    assert data['orientations']['english'] == {'accepted': False, 'acceptedAt': None}
    assert data['orientations']['gujarati']['accepted'] is True


def test_student_orientation_errors(client, factory):
    faculty = factory.student(role=UserRole.FACULTY)

    assert client.get('/orientation/xyz').status_code == 400
    assert client.get('/orientation/999').status_code == 404
    assert client.get(f'/orientation/{faculty.id}').status_code == 404


def test_bulk_orientation_status(client, factory):
    oriented = factory.student()
    factory.orient(oriented)
    waiting = factory.student()
    factory.orient(waiting, accepted=False)

    response = client.post('/orientation/bulk-status', json={'studentIds': [oriented.id, waiting.id]})

    assert response.status_code == 200
    assert response.get_json()['data'] == {str(oriented.id): True, str(waiting.id): False}


def test_bulk_orientation_status_validation(client):
    assert client.post('/orientation/bulk-status', json={'studentIds': []}).status_code == 400
    assert client.post('/orientation/bulk-status', json={'studentIds': ['1']}).status_code == 400
    assert client.post('/orientation/bulk-status', data='nope').status_code == 400


def test_health_endpoints(client):
    assert client.get('/health').get_json()['status'] == 'ok'

    response = client.get('/health/database')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'healthy'


def test_unknown_route_returns_json(client):
    response = client.get('/no-such-page')

    assert response.status_code == 404
    assert response.get_json()['status'] == 'error'


def test_non_ascii_digit_ids_are_rejected(client):
    response = client.get('/batches/²/candidates/suggest')
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Invalid batch ID'

    response = client.get('/orientation/²')
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Invalid student id'


def test_ids_beyond_the_column_range_are_rejected(client):
    huge = '99999999999999999999999'

    assert client.get(f'/batches/{huge}/candidates/suggest').status_code == 400
    assert client.get(f'/orientation/{huge}').status_code == 400
    assert client.post('/orientation/bulk-status', json={'studentIds': [2 ** 31]}).status_code == 400


def test_bulk_orientation_status_requires_an_object_body(client):
    assert client.post('/orientation/bulk-status', json=[1, 2]).status_code == 400
