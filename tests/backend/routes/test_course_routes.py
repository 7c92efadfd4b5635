import pytest

NEW_COURSE = {'name': 'X', 'description': 'Y', 'subject': 'Z', 'credits': 3}


def test_list_courses_returns_seed_catalog(client) -> None:
    response = client.get('/courses')

    assert response.status_code == 200
    assert response.json() == [
        {
            'id': 1,
            'name': 'Web Development',
            'description': 'Learn the fundamentals of modern web development.',
            'subject': 'WEB',
            'credits': 3,
        },
        {
            'id': 2,
            'name': 'Intro to Programming',
            'description': 'Build core programming foundations and problem-solving skills.',
            'subject': 'CS',
            'credits': 4,
        },
    ]


def test_get_course_returns_single_course(client) -> None:
    response = client.get('/courses/2')

    assert response.status_code == 200
    assert response.json()['name'] == 'Intro to Programming'


def test_get_unknown_course_returns_404(client) -> None:
    response = client.get('/courses/999')

    assert response.status_code == 404
    assert response.json() == {'error': 'Course not found'}


def test_get_course_with_non_integer_id_returns_400(client) -> None:
    response = client.get('/courses/abc')

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid request'}


def test_teacher_creates_course_with_next_id(client, teacher_headers) -> None:
    response = client.post('/courses', json=NEW_COURSE, headers=teacher_headers)

    assert response.status_code == 201
    assert response.json() == {'id': 3, **NEW_COURSE}
    assert client.get('/courses/3').json() == {'id': 3, **NEW_COURSE}


def test_create_trims_text_fields(client, teacher_headers) -> None:
    body = {'name': '  Databases ', 'description': ' SQL ', 'subject': ' CS ', 'credits': '2'}

    response = client.post('/courses', json=body, headers=teacher_headers)

    assert response.status_code == 201
    assert response.json() == {'id': 3, 'name': 'Databases', 'description': 'SQL', 'subject': 'CS', 'credits': 2}


def test_student_cannot_create_course(client, student_headers) -> None:
    response = client.post('/courses', json=NEW_COURSE, headers=student_headers)

    assert response.status_code == 403
    assert response.json() == {'error': 'Teacher role required'}
    assert len(client.get('/courses').json()) == 2


def test_create_without_token_returns_401(client) -> None:
    response = client.post('/courses', json=NEW_COURSE)

    assert response.status_code == 401
    assert response.headers['WWW-Authenticate'] == 'Bearer'
    assert response.json() == {'error': 'Missing or malformed Authorization header'}


def test_create_with_invalid_token_returns_401(client) -> None:
    response = client.post('/courses', json=NEW_COURSE, headers={'Authorization': 'Bearer not-a-token'})

    assert response.status_code == 401
    assert response.json() == {'error': 'Invalid or expired token'}


def test_authentication_failure_precedes_validation(client) -> None:
    response = client.post('/courses', json={})

    assert response.status_code == 401


@pytest.mark.parametrize(
    ('body', 'error'),
    [
        ({'name': 'X', 'subject': 'Z', 'credits': 3}, 'Missing required fields'),
        ({'name': 'X', 'description': 'Y', 'subject': 'Z'}, 'Missing required fields'),
        ({**NEW_COURSE, 'credits': 0}, 'Credits must be a valid number (>= 1)'),
        ({**NEW_COURSE, 'credits': 'many'}, 'Credits must be a valid number (>= 1)'),
    ],
)
def test_create_rejects_invalid_body(client, teacher_headers, body, error) -> None:
    response = client.post('/courses', json=body, headers=teacher_headers)

    assert response.status_code == 400
    assert response.json() == {'error': error}


def test_create_without_body_reports_missing_fields(client, teacher_headers) -> None:
    response = client.post('/courses', headers=teacher_headers)

    assert response.status_code == 400
    assert response.json() == {'error': 'Missing required fields'}


def test_teacher_updates_course(client, teacher_headers) -> None:
    body = {'name': 'Web Dev II', 'description': 'More web', 'subject': 'WEB', 'credits': 4}

    response = client.put('/courses/1', json=body, headers=teacher_headers)

    assert response.status_code == 200
    assert response.json() == {'id': 1, **body}
    assert client.get('/courses/1').json() == {'id': 1, **body}


def test_update_unknown_course_returns_404_before_validation(client, teacher_headers) -> None:
    response = client.put('/courses/999', json={'name': ''}, headers=teacher_headers)

    assert response.status_code == 404
    assert response.json() == {'error': 'Course not found'}


def test_update_with_invalid_body_returns_400(client, teacher_headers) -> None:
    response = client.put('/courses/1', json={**NEW_COURSE, 'credits': -1}, headers=teacher_headers)

    assert response.status_code == 400
    assert client.get('/courses/1').json()['name'] == 'Web Development'


def test_student_cannot_update_course(client, student_headers) -> None:
    response = client.put('/courses/1', json=NEW_COURSE, headers=student_headers)

    assert response.status_code == 403


def test_teacher_deletes_course(client, teacher_headers) -> None:
    response = client.delete('/courses/1', headers=teacher_headers)

    assert response.status_code == 204
    assert response.content == b''
    assert client.get('/courses/1').status_code == 404


def test_delete_unknown_course_returns_404(client, teacher_headers) -> None:
    response = client.delete('/courses/999', headers=teacher_headers)

    assert response.status_code == 404
    assert response.json() == {'error': 'Course not found'}


def test_student_cannot_delete_course(client, student_headers) -> None:
    response = client.delete('/courses/1', headers=student_headers)

    assert response.status_code == 403
    assert client.get('/courses/1').status_code == 200


def test_deleted_id_is_not_reused(client, teacher_headers) -> None:
    created = client.post('/courses', json=NEW_COURSE, headers=teacher_headers).json()
    client.delete(f"/courses/{created['id']}", headers=teacher_headers)

    response = client.post('/courses', json=NEW_COURSE, headers=teacher_headers)

    assert response.json()['id'] == created['id'] + 1


@pytest.mark.parametrize('body', [{**NEW_COURSE, 'name': 5}, ['x'], 'x'])
def test_update_unknown_course_with_malformed_body_returns_404(client, teacher_headers, body) -> None:
    response = client.put('/courses/999', json=body, headers=teacher_headers)

    assert response.status_code == 404
    assert response.json() == {'error': 'Course not found'}


def test_update_existing_course_with_non_object_body_reports_missing_fields(client, teacher_headers) -> None:
    response = client.put('/courses/1', json=['x'], headers=teacher_headers)

    assert response.status_code == 400
    assert response.json() == {'error': 'Missing required fields'}


def test_create_stringifies_numeric_name(client, teacher_headers) -> None:
    response = client.post('/courses', json={**NEW_COURSE, 'name': 5}, headers=teacher_headers)

    assert response.status_code == 201
    assert response.json()['name'] == '5'


def test_create_with_non_object_body_reports_missing_fields(client, teacher_headers) -> None:
    response = client.post('/courses', json=['X', 'Y'], headers=teacher_headers)

    assert response.status_code == 400
    assert response.json() == {'error': 'Missing required fields'}


@pytest.mark.parametrize('search', ['', '   '])
def test_blank_search_returns_every_course(client, search) -> None:
    response = client.get('/courses', params={'search': search})

    assert response.status_code == 200
    assert [course['id'] for course in response.json()] == [1, 2]


@pytest.mark.parametrize(('search', 'expected_ids'), [('cs', [2]), (' WEB ', [1]), ('intro', [2]), ('o', [1, 2])])
def test_search_matches_name_or_subject_case_insensitively(client, search, expected_ids) -> None:
    response = client.get('/courses', params={'search': search})

    assert [course['id'] for course in response.json()] == expected_ids


def test_search_without_match_returns_empty_list(client) -> None:
    response = client.get('/courses', params={'search': 'chemistry'})

    assert response.status_code == 200
    assert response.json() == []
