"""
Tests for employee management and the profile API.
"""

import json

import pytest
from django.contrib.sessions.models import Session
from django.test import Client
from django.urls import reverse

from apps.accounts.models import User


def send_json(client, method, url, body):
    return getattr(client, method)(url, data=json.dumps(body), content_type='application/json')


NEW_EMPLOYEE = {
    'email': 'Nina.New@Example.com',
    'first_name': 'Nina',
    'last_name': 'New',
    'password': 'Blue-Harbour-2026',
    'role': 'EDITOR',
}


@pytest.mark.django_db
class TestEmployeeCollection:

    def test_ceo_creates_employee(self, client, ceo):
        client.force_login(ceo)

        response = send_json(client, 'post', reverse('accounts:employee_collection'), NEW_EMPLOYEE)

        assert response.status_code == 201
        data = response.json()['data']
        assert data['email'] == 'nina.new@example.com'
        assert data['role'] == 'EDITOR'
        user = User.objects.get(email='nina.new@example.com')
        assert user.check_password('Blue-Harbour-2026')

    def test_only_ceo_creates(self, client, manager):
        client.force_login(manager)

        response = send_json(client, 'post', reverse('accounts:employee_collection'), NEW_EMPLOYEE)

        assert response.status_code == 403
        assert not User.objects.filter(email='nina.new@example.com').exists()

    @pytest.mark.parametrize('changes', [
        {'email': ''},
        {'email': 'not-an-email'},
        {'role': 'JANITOR'},
        {'password': '12345678'},
        {'password': ''},
    ])
    def test_invalid_employee(self, client, ceo, changes):
        client.force_login(ceo)

        response = send_json(
            client, 'post', reverse('accounts:employee_collection'), {**NEW_EMPLOYEE, **changes}
        )

        assert response.status_code == 400

    def test_duplicate_email(self, client, ceo, teacher):
        client.force_login(ceo)

        response = send_json(
            client, 'post', reverse('accounts:employee_collection'),
            {**NEW_EMPLOYEE, 'email': teacher.email.upper()},
        )

        assert response.status_code == 400
        assert 'already exists' in response.json()['error']

    def test_list_active_employees(self, client, make_user, teacher, ceo):
        make_user(is_active=False)

        client.force_login(teacher)
        response = client.get(reverse('accounts:employee_collection'))

        assert response.status_code == 200
        assert {user['id'] for user in response.json()} == {teacher.pk, ceo.pk}

    def test_ceo_includes_inactive(self, client, make_user, ceo):
        inactive = make_user(is_active=False)

        client.force_login(ceo)
        response = client.get(reverse('accounts:employee_collection'), {'include_inactive': '1'})

        assert inactive.pk in {user['id'] for user in response.json()}

    def test_anonymous_is_rejected(self, client):
        response = client.get(reverse('accounts:employee_collection'))

        assert response.status_code == 401


@pytest.mark.django_db
class TestEmployeeDetail:

    def test_ceo_changes_role(self, client, ceo, teacher):
        client.force_login(ceo)

        response = send_json(client, 'patch', reverse('accounts:employee_detail', args=[teacher.pk]), {
            'role': 'MANAGER',
        })

        assert response.status_code == 200
        teacher.refresh_from_db()
        assert teacher.role == User.Role.MANAGER

    def test_unknown_role(self, client, ceo, teacher):
        client.force_login(ceo)

        response = send_json(client, 'patch', reverse('accounts:employee_detail', args=[teacher.pk]), {
            'role': 'OWNER',
        })

        assert response.status_code == 400

    def test_is_active_must_be_boolean(self, client, ceo, teacher):
        client.force_login(ceo)

        response = send_json(client, 'patch', reverse('accounts:employee_detail', args=[teacher.pk]), {
            'is_active': 'no',
        })

        assert response.status_code == 400

    def test_deactivate_ends_sessions(self, client, ceo, teacher):
        teacher_client = Client()
        teacher_client.force_login(teacher)
        client.force_login(ceo)
        assert Session.objects.count() == 2

        response = client.delete(reverse('accounts:employee_detail', args=[teacher.pk]))

        assert response.status_code == 200
        teacher.refresh_from_db()
        assert teacher.is_active is False
        remaining = [session.get_decoded().get('_auth_user_id') for session in Session.objects.all()]
        assert str(teacher.pk) not in remaining

    def test_reactivate(self, client, make_user, ceo):
        inactive = make_user(is_active=False)
        client.force_login(ceo)

        response = send_json(client, 'patch', reverse('accounts:employee_detail', args=[inactive.pk]), {
            'is_active': True,
        })

        assert response.status_code == 200
        assert response.json()['is_active'] is True

    def test_ceo_cannot_deactivate_self(self, client, ceo):
        client.force_login(ceo)

        response = client.delete(reverse('accounts:employee_detail', args=[ceo.pk]))

        assert response.status_code == 400
        ceo.refresh_from_db()
        assert ceo.is_active is True

    def test_only_ceo_changes_employees(self, client, manager, teacher):
        client.force_login(manager)

        response = client.delete(reverse('accounts:employee_detail', args=[teacher.pk]))

        assert response.status_code == 403
        teacher.refresh_from_db()
        assert teacher.is_active is True

    def test_missing_employee(self, client, ceo):
        client.force_login(ceo)

        response = client.delete(reverse('accounts:employee_detail', args=[9999]))

        assert response.status_code == 404


@pytest.mark.django_db
class TestProfile:

    def test_read_own_profile(self, client, teacher):
        client.force_login(teacher)

        response = client.get(reverse('accounts:profile'))

        assert response.status_code == 200
        assert response.json()['full_name'] == 'Tara Teacher'
        assert response.json()['role'] == 'TEACHER'

    def test_update_own_name(self, client, teacher):
        client.force_login(teacher)

        response = send_json(client, 'patch', reverse('accounts:profile'), {'last_name': 'Thomas'})

        assert response.status_code == 200
        teacher.refresh_from_db()
        assert teacher.get_full_name() == 'Tara Thomas'

    def test_profile_ignores_role(self, client, teacher):
        client.force_login(teacher)

        send_json(client, 'patch', reverse('accounts:profile'), {'role': 'CEO'})

        teacher.refresh_from_db()
        assert teacher.role == User.Role.TEACHER
