# users/tests.py
"""
Users App Test Suite
====================

Registration, email-keyed JWT login and the current-user endpoint.
"""

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

User = get_user_model()


class CustomUserManagerTest(TestCase):

    def test_create_user_normalizes_email(self):
        user = User.objects.create_user(email='Someone@EXAMPLE.com', password='testpass123')

        self.assertEqual(user.email, 'Someone@example.com')
        self.assertTrue(user.check_password('testpass123'))
        self.assertFalse(user.is_staff)

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', password='testpass123')

    def test_create_superuser(self):
        admin = User.objects.create_superuser(email='admin@example.com', password='testpass123')

        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_superuser)


class AuthAPITest(APITestCase):

    def test_register_then_login(self):
        payload = {
            'email': 'new@example.com',
            'username': 'newbie',
            'password': 'Str0ng-Passphrase!',
            'password2': 'Str0ng-Passphrase!',
        }
        response = self.client.post(reverse('auth_register'), payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertNotIn('password', response.data)

        response = self.client.post(
            reverse('token_obtain_pair'),
            {'email': 'new@example.com', 'password': 'Str0ng-Passphrase!'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        response = self.client.get(reverse('user_detail'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], 'new@example.com')

    def test_register_rejects_mismatched_passwords(self):
        payload = {
            'email': 'new@example.com',
            'password': 'Str0ng-Passphrase!',
            'password2': 'Different-Passphrase!',
        }
        response = self.client.post(reverse('auth_register'), payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(email='new@example.com').exists())

    def test_user_detail_requires_authentication(self):
        response = self.client.get(reverse('user_detail'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
