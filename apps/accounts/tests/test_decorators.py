"""
Tests for Custom Decorators
============================

Tests all custom decorators to ensure proper access control.

Test Cases:
1. api_login_required decorator
2. admin_required decorator
3. role_required decorator
"""

import json

from django.test import TestCase, RequestFactory
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.http import HttpResponse
from apps.accounts.decorators import api_login_required, admin_required, role_required

User = get_user_model()


class ApiLoginRequiredDecoratorTest(TestCase):
    """Test @api_login_required decorator"""

    def setUp(self):
        """Setup test data"""
        self.factory = RequestFactory()

        self.user = User.objects.create_user(
            email='user@test.com',
            password='S3cure-pass-42',
            name='Asha Rao',
        )

        @api_login_required
        def dummy_view(request):
            return HttpResponse('Success')

        self.dummy_view = dummy_view

    def test_authenticated_user_allowed(self):
        request = self.factory.get('/api/test/')
        request.user = self.user

        response = self.dummy_view(request)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content.decode(), 'Success')

    def test_anonymous_user_gets_401_json(self):
        """No redirect to a login page, a JSON body instead"""
        request = self.factory.get('/api/test/')
        request.user = AnonymousUser()

        response = self.dummy_view(request)

        self.assertEqual(response.status_code, 401)
        body = json.loads(response.content)
        self.assertEqual(body['status'], 'fail')
        self.assertIn('not logged in', body['message'])

    def test_inactive_user_rejected(self):
        self.user.is_active = False
        request = self.factory.get('/api/test/')
        request.user = self.user

        response = self.dummy_view(request)

        self.assertEqual(response.status_code, 401)


class AdminRequiredDecoratorTest(TestCase):
    """Test @admin_required decorator"""

    def setUp(self):
        self.factory = RequestFactory()

        self.admin = User.objects.create_user(
            email='admin@test.com',
            password='S3cure-pass-42',
            name='Admin',
            role='admin',
        )
        self.member = User.objects.create_user(
            email='member@test.com',
            password='S3cure-pass-42',
            name='Member',
        )
        self.superuser = User.objects.create_superuser(
            email='root@test.com',
            password='S3cure-pass-42',
            name='Root',
        )

        @admin_required
        def dummy_view(request):
            return HttpResponse('Success')

        self.dummy_view = dummy_view

    def _call(self, user):
        request = self.factory.get('/api/test/')
        request.user = user
        return self.dummy_view(request)

    def test_admin_allowed(self):
        self.assertEqual(self._call(self.admin).status_code, 200)

    def test_superuser_allowed(self):
        self.assertEqual(self._call(self.superuser).status_code, 200)

    def test_regular_user_forbidden(self):
        response = self._call(self.member)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(json.loads(response.content)['status'], 'fail')

    def test_anonymous_user_unauthorized(self):
        self.assertEqual(self._call(AnonymousUser()).status_code, 401)


class RoleRequiredDecoratorTest(TestCase):
    """Test @role_required with several roles"""

    def setUp(self):
        self.factory = RequestFactory()
        self.member = User.objects.create_user(email='member@test.com', password='S3cure-pass-42', name='Member')

        @role_required('admin', 'user')
        def dummy_view(request):
            return HttpResponse('Success')

        self.dummy_view = dummy_view

    def test_any_listed_role_allowed(self):
        request = self.factory.get('/api/test/')
        request.user = self.member

        self.assertEqual(self.dummy_view(request).status_code, 200)
