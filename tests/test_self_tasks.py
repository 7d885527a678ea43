"""
Tests for the self task (work diary) API.
"""

import json

import pytest
from django.urls import reverse

from apps.self_tasks.models import SelfTask


def send_json(client, method, url, body):
    return getattr(client, method)(url, data=json.dumps(body), content_type='application/json')


@pytest.fixture
def make_self_task(db):
    def _make_self_task(user, **kwargs):
        kwargs.setdefault('task_date', '2026-10-19')
        kwargs.setdefault('details', 'Checked grade 5 notebooks')
        return SelfTask.objects.create(user=user, **kwargs)

    return _make_self_task


@pytest.mark.django_db
class TestSelfTaskCollection:

    def test_teacher_logs_entry(self, client, teacher):
        client.force_login(teacher)

        response = send_json(client, 'post', reverse('self_tasks:self_task_collection'), {
            'task_date': '2026-10-19',
            'details': 'Prepared science lab worksheet',
        })

        assert response.status_code == 201
        body = response.json()
        assert body['user_id'] == teacher.pk
        assert body['task_date'] == '2026-10-19'
        assert body['visibility'] == 'PUBLIC'
        assert SelfTask.objects.filter(user=teacher).count() == 1

    def test_private_entry(self, client, teacher):
        client.force_login(teacher)

        response = send_json(client, 'post', reverse('self_tasks:self_task_collection'), {
            'task_date': '2026-10-19',
            'details': 'Parent call',
            'visibility': 'PRIVATE',
        })

        assert response.status_code == 201
        assert response.json()['visibility'] == 'PRIVATE'

    @pytest.mark.parametrize('body', [
        {'details': 'No date given'},
        {'task_date': '2026-10-19', 'details': '   '},
        {'task_date': '19/10/2026', 'details': 'Bad date'},
        {'task_date': '2026-10-19', 'details': 'Odd visibility', 'visibility': 'TEAM'},
    ])
    def test_invalid_entry(self, client, teacher, body):
        client.force_login(teacher)

        response = send_json(client, 'post', reverse('self_tasks:self_task_collection'), body)

        assert response.status_code == 400
        assert not SelfTask.objects.exists()

    def test_anonymous_is_rejected(self, client):
        response = send_json(client, 'post', reverse('self_tasks:self_task_collection'), {
            'task_date': '2026-10-19',
            'details': 'Anonymous entry',
        })

        assert response.status_code == 401

    def test_employee_sees_only_own_entries(self, client, make_user, make_self_task, teacher):
        own = make_self_task(teacher)
        make_self_task(make_user())

        client.force_login(teacher)
        response = client.get(reverse('self_tasks:self_task_collection'))

        assert response.status_code == 200
        assert [entry['id'] for entry in response.json()] == [own.pk]

    def test_ceo_sees_public_entries_of_others(self, client, make_self_task, teacher, ceo):
        public = make_self_task(teacher, visibility=SelfTask.Visibility.PUBLIC)
        make_self_task(teacher, visibility=SelfTask.Visibility.PRIVATE)
        own_private = make_self_task(ceo, visibility=SelfTask.Visibility.PRIVATE)

        client.force_login(ceo)
        response = client.get(reverse('self_tasks:self_task_collection'))

        ids = {entry['id'] for entry in response.json()}
        assert ids == {public.pk, own_private.pk}

    def test_manager_does_not_see_others(self, client, make_self_task, teacher, manager):
        make_self_task(teacher, visibility=SelfTask.Visibility.PUBLIC)

        client.force_login(manager)
        response = client.get(reverse('self_tasks:self_task_collection'))

        assert response.json() == []

    def test_filters(self, client, make_user, make_self_task, teacher, ceo):
        make_self_task(teacher, task_date='2026-10-18')
        wanted = make_self_task(teacher, task_date='2026-10-19')
        make_self_task(make_user(), task_date='2026-10-19')

        client.force_login(ceo)
        url = reverse('self_tasks:self_task_collection')
        response = client.get(url, {'user_id': teacher.pk, 'date': '2026-10-19'})

        assert [entry['id'] for entry in response.json()] == [wanted.pk]


@pytest.mark.django_db
class TestSelfTaskDetail:

    def test_owner_edits_entry(self, client, make_self_task, teacher):
        entry = make_self_task(teacher)
        client.force_login(teacher)

        response = send_json(client, 'patch', reverse('self_tasks:self_task_detail', args=[entry.pk]), {
            'details': 'Checked grade 6 notebooks',
            'visibility': 'PRIVATE',
        })

        assert response.status_code == 200
        entry.refresh_from_db()
        assert entry.details == 'Checked grade 6 notebooks'
        assert entry.visibility == SelfTask.Visibility.PRIVATE

    def test_owner_deletes_entry(self, client, make_self_task, teacher):
        entry = make_self_task(teacher)
        client.force_login(teacher)

        response = client.delete(reverse('self_tasks:self_task_detail', args=[entry.pk]))

        assert response.status_code == 200
        assert response.json() == {'success': True}
        assert not SelfTask.objects.filter(pk=entry.pk).exists()

    @pytest.mark.parametrize('method', ['patch', 'delete'])
    def test_ceo_cannot_change_others_entry(self, client, make_self_task, teacher, ceo, method):
        entry = make_self_task(teacher)
        client.force_login(ceo)

        response = send_json(client, method, reverse('self_tasks:self_task_detail', args=[entry.pk]), {
            'details': 'Rewritten by someone else',
        })

        assert response.status_code == 403
        entry.refresh_from_db()
        assert entry.details == 'Checked grade 5 notebooks'

    def test_missing_entry(self, client, teacher):
        client.force_login(teacher)

        response = client.delete(reverse('self_tasks:self_task_detail', args=[9999]))

        assert response.status_code == 404
