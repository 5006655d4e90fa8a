"""
Account Views Tests
===================

Test Coverage:
1. Login / logout / signup (session auth, JSON)
2. Current user - read, update, password change
3. Password reset - request email, confirm with token
4. User management (admin only) - list through the query pipeline, CRUD

Run tests:
    python manage.py test apps.accounts.tests.test_views
"""

import json

from django.contrib.auth.tokens import default_token_generator
from django.core import mail
from django.test import TestCase, Client
from django.urls import reverse
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode

from apps.accounts.models import User

PASSWORD = 'S3cure-pass-42'


class AccountsTestCase(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='asha@test.com', password=PASSWORD, name='Asha Rao')

    def post_json(self, url, data):
        return self.client.post(url, data=json.dumps(data), content_type='application/json')

    def patch_json(self, url, data):
        return self.client.patch(url, data=json.dumps(data), content_type='application/json')


class LoginViewTest(AccountsTestCase):

    def test_login_success(self):
        response = self.post_json(reverse('accounts:login'), {'email': 'ASHA@test.com', 'password': PASSWORD})

        self.assertEqual(response.status_code, 200)
        user = response.json()['data']['user']
        self.assertEqual(user['email'], 'asha@test.com')
        self.assertNotIn('password', user)
        self.assertIn('_auth_user_id', self.client.session)

    def test_wrong_password(self):
        response = self.post_json(reverse('accounts:login'), {'email': 'asha@test.com', 'password': 'wrong-one'})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'Incorrect email or password')

    def test_missing_fields(self):
        response = self.post_json(reverse('accounts:login'), {'email': 'asha@test.com'})

        self.assertEqual(response.status_code, 400)
        self.assertIn('password', response.json()['errors'])

    def test_get_not_allowed(self):
        self.assertEqual(self.client.get(reverse('accounts:login')).status_code, 405)

    def test_logout(self):
        self.client.force_login(self.user)

        response = self.client.post(reverse('accounts:logout'))

        self.assertEqual(response.status_code, 200)
        self.assertNotIn('_auth_user_id', self.client.session)


class SignupViewTest(AccountsTestCase):

    def test_signup_creates_regular_user(self):
        response = self.post_json(reverse('accounts:signup'), {
            'name': 'New Engineer',
            'email': 'new@test.com',
            'password': PASSWORD,
            'password_confirm': PASSWORD,
            'role': 'admin',
        })

        self.assertEqual(response.status_code, 201)
        user = User.objects.get(email='new@test.com')
        self.assertEqual(user.role, 'user')
        self.assertTrue(user.check_password(PASSWORD))

    def test_passwords_must_match(self):
        response = self.post_json(reverse('accounts:signup'), {
            'name': 'New Engineer',
            'email': 'new@test.com',
            'password': PASSWORD,
            'password_confirm': PASSWORD + 'x',
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('password_confirm', response.json()['errors'])

    def test_duplicate_email(self):
        response = self.post_json(reverse('accounts:signup'), {
            'name': 'Copy',
            'email': 'Asha@test.com',
            'password': PASSWORD,
            'password_confirm': PASSWORD,
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('email', response.json()['errors'])


class MeViewTest(AccountsTestCase):

    def setUp(self):
        super().setUp()
        self.client.force_login(self.user)

    def test_get_me(self):
        response = self.client.get(reverse('accounts:me'))
        self.assertEqual(response.json()['data']['user']['name'], 'Asha Rao')

    def test_update_profile(self):
        response = self.patch_json(reverse('accounts:me'), {
            'bio': 'Mooring design',
            'urls': [{'label': 'LinkedIn', 'value': 'https://linkedin.com/in/asha'}],
        })

        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertEqual(self.user.bio, 'Mooring design')
        self.assertEqual(self.user.name, 'Asha Rao')
        self.assertEqual(self.user.urls[0]['label'], 'LinkedIn')

    def test_cannot_change_own_role(self):
        self.patch_json(reverse('accounts:me'), {'role': 'admin'})

        self.user.refresh_from_db()
        self.assertEqual(self.user.role, 'user')

    def test_password_not_accepted_here(self):
        response = self.patch_json(reverse('accounts:me'), {'password': 'another-pass-99'})
        self.assertEqual(response.status_code, 400)

    def test_password_change(self):
        response = self.post_json(reverse('accounts:password_change'), {
            'current_password': PASSWORD,
            'new_password': 'Brand-new-pass-7',
            'new_password_confirm': 'Brand-new-pass-7',
        })

        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('Brand-new-pass-7'))
        self.assertIsNotNone(self.user.password_changed_at)
        # Session survives the password change
        self.assertEqual(self.client.get(reverse('accounts:me')).status_code, 200)

    def test_password_change_wrong_current(self):
        response = self.post_json(reverse('accounts:password_change'), {
            'current_password': 'nope-nope-nope',
            'new_password': 'Brand-new-pass-7',
            'new_password_confirm': 'Brand-new-pass-7',
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('current_password', response.json()['errors'])


class PasswordResetViewTest(AccountsTestCase):

    def test_request_sends_email(self):
        response = self.post_json(reverse('accounts:password_reset'), {'email': 'asha@test.com'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn('/reset-password/', mail.outbox[0].body)

    def test_unknown_email_same_answer_no_email(self):
        known = self.post_json(reverse('accounts:password_reset'), {'email': 'asha@test.com'}).json()
        unknown = self.post_json(reverse('accounts:password_reset'), {'email': 'ghost@test.com'}).json()

        self.assertEqual(known['message'], unknown['message'])
        self.assertEqual(len(mail.outbox), 1)

    def test_confirm_with_valid_token(self):
        uid = urlsafe_base64_encode(force_bytes(self.user.pk))
        token = default_token_generator.make_token(self.user)

        response = self.post_json(
            reverse('accounts:password_reset_confirm', args=[uid, token]),
            {'new_password': 'Reset-pass-123', 'new_password_confirm': 'Reset-pass-123'},
        )

        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('Reset-pass-123'))

    def test_confirm_with_bad_token(self):
        uid = urlsafe_base64_encode(force_bytes(self.user.pk))

        response = self.post_json(
            reverse('accounts:password_reset_confirm', args=[uid, 'bad-token']),
            {'new_password': 'Reset-pass-123', 'new_password_confirm': 'Reset-pass-123'},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Token is invalid or has expired')


class UserManagementViewTest(AccountsTestCase):

    def setUp(self):
        super().setUp()
        self.admin = User.objects.create_user(email='admin@test.com', password=PASSWORD, name='Admin', role='admin')
        self.client.force_login(self.admin)

    def test_regular_user_forbidden(self):
        self.client.force_login(self.user)
        self.assertEqual(self.client.get(reverse('accounts:user_list')).status_code, 403)

    def test_list_never_contains_password(self):
        response = self.client.get(reverse('accounts:user_list'))

        body = response.json()
        self.assertEqual(body['totalCount'], 2)
        for user in body['data']['users']:
            self.assertNotIn('password', user)

    def test_list_filter_and_search(self):
        response = self.client.get(reverse('accounts:user_list'), {'role': 'admin'})
        self.assertEqual(response.json()['totalCount'], 1)

        response = self.client.get(reverse('accounts:user_list'), {'search': 'asha'})
        self.assertEqual(response.json()['data']['users'][0]['email'], 'asha@test.com')

    def test_password_cannot_be_queried(self):
        response = self.client.get(reverse('accounts:user_list'), {'fields': 'email,password'})
        self.assertEqual(response.status_code, 400)

        response = self.client.get(reverse('accounts:user_list'), {'sort': 'password'})
        self.assertEqual(response.status_code, 400)

    def test_admin_creates_user_with_role(self):
        response = self.post_json(reverse('accounts:user_list'), {
            'name': 'Second Admin',
            'email': 'second@test.com',
            'role': 'admin',
            'password': PASSWORD,
            'password_confirm': PASSWORD,
        })

        self.assertEqual(response.status_code, 201)
        self.assertEqual(User.objects.get(email='second@test.com').role, 'admin')

    def test_update_user(self):
        response = self.patch_json(reverse('accounts:user_detail', args=[self.user.pk]), {'is_active': False})

        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertFalse(self.user.is_active)

    def test_delete_user(self):
        response = self.client.delete(reverse('accounts:user_detail', args=[self.user.pk]))

        self.assertEqual(response.status_code, 204)
        self.assertFalse(User.objects.filter(pk=self.user.pk).exists())

    def test_cannot_delete_self(self):
        response = self.client.delete(reverse('accounts:user_detail', args=[self.admin.pk]))
        self.assertEqual(response.status_code, 400)
