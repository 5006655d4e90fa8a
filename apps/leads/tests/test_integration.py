"""
Integration Tests
=================

Tests complete user flows across the apps.

Test Scenarios:
1. Company → lead with designs → task on the lead → progress → done
2. Deleting a company keeps its leads; deleting a lead keeps its tasks
3. Listing endpoints agree on the envelope and the query string rules

Run tests:
    python manage.py test apps.leads.tests.test_integration
"""

import json
from datetime import timedelta
from unittest.mock import patch

from django.test import TestCase, Client
from django.urls import reverse
from django.utils import timezone

from apps.accounts.models import User
from apps.core.models import Company
from apps.leads.models import Lead
from apps.leads.tests.test_forms import lead_data
from apps.leads.tests.test_models import DESIGN
from apps.notifications.models import Notification
from apps.tasks.models import Task


class LeadToTaskIntegrationTest(TestCase):
    """
    Flow:
    1. Sales manager creates the client company
    2. Sales manager creates a lead for it with a first design
    3. A second design version is added
    4. Sales manager assigns a survey task to an engineer
    5. Engineer reports progress, then completes the task
    """

    def setUp(self):
        self.manager = User.objects.create_user(email='manager@test.com', password='S3cure-pass-42', name='Manager')
        self.engineer = User.objects.create_user(email='engineer@test.com', password='S3cure-pass-42', name='Engineer')

        self.manager_client = Client()
        self.manager_client.force_login(self.manager)
        self.engineer_client = Client()
        self.engineer_client.force_login(self.engineer)

    def post(self, client, url, data):
        return client.post(url, data=json.dumps(data), content_type='application/json')

    @patch('apps.tasks.views.send_task_assignment_email.delay')
    def test_full_flow(self, mock_delay):
        # Step 1: company
        response = self.post(self.manager_client, reverse('core:company_list'), {
            'name': 'Aqua Solar',
            'contacts': [{'name': 'Ravi', 'role': 'primary'}],
        })
        self.assertEqual(response.status_code, 201)
        company_id = response.json()['data']['company']['id']

        # Step 2: lead with its first design
        response = self.post(self.manager_client, reverse('leads:lead_list'),
                             lead_data(client=company_id, design_configurations=[DESIGN]))
        self.assertEqual(response.status_code, 201)
        lead_id = response.json()['data']['lead']['id']

        # Step 3: second design version
        response = self.post(self.manager_client, reverse('leads:lead_add_design', args=[lead_id]),
                             {**DESIGN, 'anchoring': 'Bottom Anchoring'})
        self.assertEqual(len(response.json()['data']['lead']['design_configurations']), 2)

        # Step 4: task
        with self.captureOnCommitCallbacks(execute=True):
            response = self.post(self.manager_client, reverse('tasks:task_list'), {
                'title': 'Bathymetry survey',
                'due_date': (timezone.now() + timedelta(days=5)).isoformat(),
                'assigned_to': self.engineer.pk,
                'lead': lead_id,
                'priority': 'High',
            })
        self.assertEqual(response.status_code, 201)
        task_id = response.json()['data']['task']['id']
        mock_delay.assert_called_once_with(task_id)

        # The engineer sees the assignment
        response = self.engineer_client.get(reverse('notifications:unread_count'))
        self.assertEqual(response.json()['data']['count'], 1)

        # Step 5: progress, then done
        self.post(self.engineer_client, reverse('tasks:task_add_update', args=[task_id]),
                  {'status': 'In Progress', 'remarks': 'Boat booked'})
        self.post(self.engineer_client, reverse('tasks:task_add_update', args=[task_id]),
                  {'status': 'Done', 'remarks': 'Survey uploaded'})

        task = Task.objects.get(pk=task_id)
        self.assertEqual(task.status, 'Done')
        self.assertEqual(task.updates.count(), 2)

        manager_types = list(Notification.objects.filter(recipient=self.manager)
                             .order_by('pk').values_list('type', flat=True))
        self.assertEqual(manager_types, ['task_updated', 'task_completed'])

        # Tasks of the lead, through the list endpoint
        response = self.manager_client.get(reverse('tasks:task_list'), {'lead': lead_id, 'status': 'Done'})
        self.assertEqual(response.json()['totalCount'], 1)

    def test_deletions_keep_history(self):
        company = Company.objects.create(name='Aqua Solar')
        lead = Lead.objects.create(**{**lead_data(), 'client': company})
        task = Task.objects.create(
            title='Survey',
            due_date=timezone.now(),
            assigned_to=self.engineer,
            assigned_by=self.manager,
            lead=lead,
        )

        company.delete()
        lead.refresh_from_db()
        self.assertIsNone(lead.client)

        lead.delete()
        task.refresh_from_db()
        self.assertIsNone(task.lead)


class ListEnvelopeIntegrationTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='user@test.com', password='S3cure-pass-42', name='User')
        self.client.force_login(self.user)

    def test_every_list_shares_the_envelope(self):
        urls = [
            reverse('core:company_list'),
            reverse('leads:lead_list'),
            reverse('sites:site_list'),
            reverse('tasks:task_list'),
            reverse('notifications:notification_list'),
        ]
        for url in urls:
            with self.subTest(url=url):
                body = self.client.get(url).json()
                self.assertEqual(body['status'], 'success')
                self.assertEqual(body['results'], 0)
                self.assertEqual(body['totalCount'], 0)
                self.assertEqual(body['page'], 1)

    def test_bad_query_is_400_everywhere(self):
        for url in (reverse('core:company_list'), reverse('leads:lead_list'),
                    reverse('sites:site_list'), reverse('tasks:task_list')):
            with self.subTest(url=url):
                response = self.client.get(url, {'sort': 'no_such_field'})
                self.assertEqual(response.status_code, 400)
