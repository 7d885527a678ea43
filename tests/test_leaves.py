"""
Tests for the leave request API.
"""

import json

import pytest
from django.urls import reverse

from apps.leaves.models import Leave


def send_json(client, method, url, body):
    return getattr(client, method)(url, data=json.dumps(body), content_type='application/json')


@pytest.fixture
def make_leave(db):
    def _make_leave(user, **kwargs):
        kwargs.setdefault('start_date', '2026-11-02')
        kwargs.setdefault('end_date', '2026-11-04')
        return Leave.objects.create(user=user, **kwargs)

    return _make_leave


@pytest.mark.django_db
class TestLeaveCollection:

    def test_request_leave(self, client, teacher):
        client.force_login(teacher)

        response = send_json(client, 'post', reverse('leaves:leave_collection'), {
            'start_date': '2026-11-02',
            'end_date': '2026-11-04',
            'reason': 'Family event',
        })

        assert response.status_code == 201
        body = response.json()
        assert body['status'] == 'PENDING'
        assert body['duration_days'] == 3
        assert body['user_id'] == teacher.pk

    def test_reversed_range(self, client, teacher):
        client.force_login(teacher)

        response = send_json(client, 'post', reverse('leaves:leave_collection'), {
            'start_date': '2026-11-04',
            'end_date': '2026-11-02',
        })

        assert response.status_code == 400

    def test_bad_date_format(self, client, teacher):
        client.force_login(teacher)

        response = send_json(client, 'post', reverse('leaves:leave_collection'), {
            'start_date': '04/11/2026',
            'end_date': '2026-11-05',
        })

        assert response.status_code == 400
        assert 'start_date' in response.json()['error']

    def test_visibility(self, client, make_user, make_leave, teacher, ceo):
        own = make_leave(teacher)
        make_leave(make_user())

        client.force_login(teacher)
        assert [leave['id'] for leave in client.get(reverse('leaves:leave_collection')).json()] == [own.pk]

        client.force_login(ceo)
        assert len(client.get(reverse('leaves:leave_collection')).json()) == 2

    def test_status_filter(self, client, make_leave, teacher, ceo):
        make_leave(teacher)
        approved = make_leave(teacher, status=Leave.Status.APPROVED)
        client.force_login(ceo)

        response = client.get(reverse('leaves:leave_collection'), {'status': 'APPROVED'})

        assert [leave['id'] for leave in response.json()] == [approved.pk]


@pytest.mark.django_db
class TestLeaveDetail:

    def test_ceo_approves(self, client, make_leave, teacher, ceo):
        leave = make_leave(teacher)
        client.force_login(ceo)

        response = send_json(client, 'patch', reverse('leaves:leave_detail', args=[leave.pk]), {'status': 'APPROVED'})

        assert response.status_code == 200
        leave.refresh_from_db()
        assert leave.status == Leave.Status.APPROVED
        assert leave.approved_by == ceo
        assert leave.approved_at is not None

    def test_reopening_clears_decision(self, client, make_leave, teacher, ceo):
        leave = make_leave(teacher)
        client.force_login(ceo)
        url = reverse('leaves:leave_detail', args=[leave.pk])

        send_json(client, 'patch', url, {'status': 'REJECTED'})
        send_json(client, 'patch', url, {'status': 'PENDING'})

        leave.refresh_from_db()
        assert leave.status == Leave.Status.PENDING
        assert leave.approved_by is None
        assert leave.approved_at is None

    def test_employee_cannot_decide(self, client, make_leave, teacher):
        leave = make_leave(teacher)
        client.force_login(teacher)

        response = send_json(client, 'patch', reverse('leaves:leave_detail', args=[leave.pk]), {'status': 'APPROVED'})

        assert response.status_code == 403

    def test_owner_edits_pending_request(self, client, make_leave, teacher):
        leave = make_leave(teacher)
        client.force_login(teacher)

        response = send_json(client, 'patch', reverse('leaves:leave_detail', args=[leave.pk]), {
            'end_date': '2026-11-06',
            'reason': 'Longer trip',
        })

        assert response.status_code == 200
        assert response.json()['duration_days'] == 5

    def test_other_users_request_is_hidden(self, client, make_user, make_leave, teacher):
        leave = make_leave(make_user())
        client.force_login(teacher)

        response = send_json(client, 'patch', reverse('leaves:leave_detail', args=[leave.pk]), {'reason': 'x'})

        assert response.status_code == 403

    def test_owner_withdraws_pending_request(self, client, make_leave, teacher):
        leave = make_leave(teacher)
        client.force_login(teacher)

        response = client.delete(reverse('leaves:leave_detail', args=[leave.pk]))

        assert response.status_code == 200
        assert not Leave.objects.filter(pk=leave.pk).exists()

    def test_decided_request_cannot_be_withdrawn(self, client, make_leave, teacher):
        leave = make_leave(teacher, status=Leave.Status.APPROVED)
        client.force_login(teacher)

        response = client.delete(reverse('leaves:leave_detail', args=[leave.pk]))

        assert response.status_code == 403
        assert Leave.objects.filter(pk=leave.pk).exists()
