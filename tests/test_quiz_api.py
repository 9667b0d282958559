"""
API tests for quiz authoring, listing and attempts.
"""

import pytest

from comes_app.models import Quiz, QuizAttempt
from conftest import quiz_payload


def _create_quiz(client, **kwargs):
    response = client.post('/api/v1/quizzes/', json=quiz_payload(**kwargs))
    assert response.status_code == 201, response.get_json()
    return response.get_json()['data']['quiz']


def _correct_submission(quiz, seconds=(10, 0), name='Alice'):
    q1, q2 = quiz['questions']
    return {
        'participant_name': name,
        'responses': [
            {'question_id': q1['question_id'], 'selected_answer_index': 1, 'response_time_seconds': seconds[0]},
            {'question_id': q2['question_id'], 'selected_answer_index': 2, 'response_time_seconds': seconds[1]},
        ],
    }


class TestQuizAuthoring:
    def test_create_returns_correctness_flags_and_slug(self, client):
        quiz = _create_quiz(client)

        assert quiz['slug'] == 'general-knowledge'
        assert quiz['total_marks'] == 15
        assert quiz['question_count'] == 2
        assert quiz['questions'][0]['answers'][1] == {'text': '4', 'is_correct': True}

    def test_duplicate_titles_get_unique_slugs(self, client):
        first = _create_quiz(client)
        second = _create_quiz(client)
        assert first['slug'] == 'general-knowledge'
        assert second['slug'] == 'general-knowledge-2'

    def test_get_strips_correctness_flags(self, client):
        quiz = _create_quiz(client)

        response = client.get(f"/api/v1/quizzes/{quiz['quiz_id']}")

        assert response.status_code == 200
        for question in response.get_json()['data']['quiz']['questions']:
            for answer in question['answers']:
                assert 'is_correct' not in answer

    def test_get_missing_quiz(self, client):
        response = client.get('/api/v1/quizzes/999')
        body = response.get_json()
        assert response.status_code == 404
        assert body['success'] is False
        assert body['code'] == 'NOT_FOUND'

    @pytest.mark.parametrize('mutate, field', [
        (lambda p: p['questions'][0]['answers'].pop(), 'questions.0.answers'),
        (lambda p: p['questions'][0].update(time_limit_seconds=2), 'questions.0.time_limit_seconds'),
        (lambda p: p['questions'][0].update(marks=0), 'questions.0.marks'),
        (lambda p: p.update(title='ab'), 'title'),
    ])
    def test_create_rejects_invalid_payload(self, client, mutate, field):
        payload = quiz_payload()
        mutate(payload)

        response = client.post('/api/v1/quizzes/', json=payload)

        assert response.status_code == 400
        assert field in response.get_json()['details']['errors']

    def test_create_requires_a_correct_answer(self, client):
        payload = quiz_payload()
        for answer in payload['questions'][1]['answers']:
            answer['is_correct'] = False

        response = client.post('/api/v1/quizzes/', json=payload)

        assert response.status_code == 400
        errors = response.get_json()['details']['errors']
        assert errors['questions.1.answers'] == 'Each question must have at least one correct answer'

    def test_update_title_regenerates_slug(self, client):
        quiz = _create_quiz(client)

        response = client.patch(f"/api/v1/quizzes/{quiz['quiz_id']}", json={'title': 'Science Round'})

        assert response.status_code == 200
        updated = response.get_json()['data']['quiz']
        assert updated['title'] == 'Science Round'
        assert updated['slug'] == 'science-round'
        assert updated['question_count'] == 2

    def test_update_rejects_null_title(self, client):
        quiz = _create_quiz(client)
        response = client.patch(f"/api/v1/quizzes/{quiz['quiz_id']}", json={'title': None})
        assert response.status_code == 400

    def test_toggle_and_set_visibility(self, client):
        quiz = _create_quiz(client)
        url = f"/api/v1/quizzes/{quiz['quiz_id']}/visibility"

        toggled = client.patch(url, json={}).get_json()
        assert toggled['data']['quiz']['is_visible'] is False
        assert toggled['message'] == 'Quiz is now hidden'

        explicit = client.patch(url, json={'is_visible': True}).get_json()
        assert explicit['data']['quiz']['is_visible'] is True

    def test_delete_removes_quiz_and_attempts(self, client, row_count):
        quiz = _create_quiz(client)
        client.post(f"/api/v1/quizzes/{quiz['quiz_id']}/attempt", json=_correct_submission(quiz))

        response = client.delete(f"/api/v1/quizzes/{quiz['quiz_id']}")

        assert response.status_code == 200
        assert response.get_json()['data'] is None
        assert row_count(Quiz) == 0
        assert row_count(QuizAttempt) == 0


class TestQuizListing:
    def test_hidden_quizzes_are_excluded_by_default(self, client):
        _create_quiz(client, title='Visible Quiz')
        _create_quiz(client, title='Hidden Quiz', is_visible=False)

        default = client.get('/api/v1/quizzes/')
        everything = client.get('/api/v1/quizzes/?include_hidden=true')

        assert [q['title'] for q in default.get_json()['data']['quizzes']] == ['Visible Quiz']
        assert default.headers['X-Total-Count'] == '1'
        assert everything.get_json()['data']['pagination']['total'] == 2

    def test_listing_strips_correctness_flags(self, client):
        _create_quiz(client)
        quizzes = client.get('/api/v1/quizzes/').get_json()['data']['quizzes']
        assert all('is_correct' not in a for q in quizzes for question in q['questions'] for a in question['answers'])

    def test_search_and_sort(self, client):
        _create_quiz(client, title='Zoology Basics')
        _create_quiz(client, title='Algebra Basics')
        _create_quiz(client, title='History')

        response = client.get('/api/v1/quizzes/?search=basics&sort=title')

        assert [q['title'] for q in response.get_json()['data']['quizzes']] == ['Algebra Basics', 'Zoology Basics']

    def test_pagination(self, client):
        for i in range(3):
            _create_quiz(client, title=f'Quiz number {i}')

        response = client.get('/api/v1/quizzes/?page=2&limit=2')
        body = response.get_json()['data']

        assert len(body['quizzes']) == 1
        assert body['pagination'] == {'page': 2, 'limit': 2, 'total': 3, 'pages': 2}

    @pytest.mark.parametrize('query', ['sort=-views', 'limit=500', 'page=0'])
    def test_invalid_listing_arguments(self, client, query):
        response = client.get(f'/api/v1/quizzes/?{query}')
        assert response.status_code == 400
        assert response.get_json()['code'] == 'VALIDATION_ERROR'


class TestAttempts:
    def test_submit_scores_with_time_decay(self, client):
        quiz = _create_quiz(client)

        response = client.post(f"/api/v1/quizzes/{quiz['quiz_id']}/attempt", json=_correct_submission(quiz))

        assert response.status_code == 201
        attempt = response.get_json()['data']['attempt']
        assert attempt['participant_name'] == 'Alice'
        assert [r['marks_awarded'] for r in attempt['responses']] == [5.0, 5.0]
        assert attempt['total_marks'] == 10.0
        assert attempt['max_marks'] == 15
        assert attempt['percentage'] == 66.67

    def test_unknown_question_creates_no_attempt(self, client, row_count):
        quiz = _create_quiz(client)
        submission = _correct_submission(quiz)
        submission['responses'].append(
            {'question_id': 9999, 'selected_answer_index': 0, 'response_time_seconds': 1}
        )

        response = client.post(f"/api/v1/quizzes/{quiz['quiz_id']}/attempt", json=submission)

        assert response.status_code == 400
        body = response.get_json()
        assert body['code'] == 'INVALID_REFERENCE'
        assert body['details'] == {'question_id': 9999}
        assert row_count(QuizAttempt) == 0

    def test_duplicate_question_ids_are_rejected(self, client, row_count):
        quiz = _create_quiz(client)
        submission = _correct_submission(quiz)
        submission['responses'][1]['question_id'] = submission['responses'][0]['question_id']

        response = client.post(f"/api/v1/quizzes/{quiz['quiz_id']}/attempt", json=submission)

        assert response.status_code == 400
        assert row_count(QuizAttempt) == 0

    @pytest.mark.parametrize('override', [
        {'participant_name': 'A'},
        {'responses': []},
    ])
    def test_submission_validation(self, client, override):
        quiz = _create_quiz(client)
        submission = _correct_submission(quiz)
        submission.update(override)

        response = client.post(f"/api/v1/quizzes/{quiz['quiz_id']}/attempt", json=submission)

        assert response.status_code == 400

    def test_hidden_quiz_rejects_attempts(self, client, row_count):
        quiz = _create_quiz(client, is_visible=False)

        response = client.post(f"/api/v1/quizzes/{quiz['quiz_id']}/attempt", json=_correct_submission(quiz))

        assert response.status_code == 403
        assert row_count(QuizAttempt) == 0

    def test_missing_quiz_rejects_attempts(self, client):
        response = client.post('/api/v1/quizzes/77/attempt', json={
            'participant_name': 'Alice',
            'responses': [{'question_id': 1, 'selected_answer_index': 0, 'response_time_seconds': 1}],
        })
        assert response.status_code == 404

    def test_leaderboard_orders_by_score(self, client):
        quiz = _create_quiz(client)
        url = f"/api/v1/quizzes/{quiz['quiz_id']}/attempt"
        client.post(url, json=_correct_submission(quiz, seconds=(18, 25), name='Slow'))
        client.post(url, json=_correct_submission(quiz, seconds=(0, 0), name='Fast'))
        client.post(url, json=_correct_submission(quiz, seconds=(10, 15), name='Middle'))

        top = client.get(f"/api/v1/quizzes/{quiz['quiz_id']}/attempts")
        recent = client.get(f"/api/v1/quizzes/{quiz['quiz_id']}/attempts?sort=recent")

        assert [a['participant_name'] for a in top.get_json()['data']['attempts']] == ['Fast', 'Middle', 'Slow']
        assert top.headers['X-Total-Count'] == '3'
        assert recent.get_json()['data']['attempts'][0]['participant_name'] == 'Middle'

    def test_infinite_response_time_is_rejected(self, client, row_count):
        quiz = _create_quiz(client)
        submission = _correct_submission(quiz)
        submission['responses'][0]['response_time_seconds'] = float('inf')

        response = client.post(f"/api/v1/quizzes/{quiz['quiz_id']}/attempt", json=submission)

        assert response.status_code == 400
        assert 'responses.0.response_time_seconds' in response.get_json()['details']['errors']
        assert row_count(QuizAttempt) == 0


class TestQuizRouting:
    def test_collection_without_trailing_slash(self, client):
        created = client.post('/api/v1/quizzes', json=quiz_payload())
        listed = client.get('/api/v1/quizzes')

        assert created.status_code == 201
        assert listed.status_code == 200
        assert listed.headers['X-Total-Count'] == '1'

    @pytest.mark.parametrize('quiz_id', ['99999999999999999999999', '0'])
    def test_out_of_range_ids_are_not_found(self, client, quiz_id):
        response = client.get(f'/api/v1/quizzes/{quiz_id}')

        assert response.status_code == 404
        assert response.get_json()['code'] == 'NOT_FOUND'

    def test_out_of_range_attempt_target_is_not_found(self, client):
        response = client.post('/api/v1/quizzes/99999999999999999999999/attempt', json={})
        assert response.status_code == 404
