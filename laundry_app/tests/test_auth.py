# -*- coding: utf-8 -*-
"""
Test de autenticación - usuarios con hash de werkzeug sobre users.json temporal
"""
import json

import pytest
from werkzeug.security import check_password_hash

from laundry_app.repositories import AuditRepository, UserRepository
from laundry_app.services import AuditService, UserService


@pytest.fixture
def users(tmp_path):
    audit = AuditService(AuditRepository(str(tmp_path)))
    return UserService(UserRepository(str(tmp_path)), audit)


def test_password_is_stored_hashed(users, tmp_path):
    result = users.create_user('kasir1', 'rahasia', 'kasir')
    assert result == {'ok': True, 'username': 'kasir1', 'role': 'kasir'}

    with open(tmp_path / 'users.json', encoding='utf-8') as f:
        stored = json.load(f)
    assert stored['kasir1']['password'] != 'rahasia'
    assert check_password_hash(stored['kasir1']['password'], 'rahasia')


def test_authenticate(users):
    users.create_user('admin', '1234', 'admin')

    assert users.authenticate('admin', '1234') == {'username': 'admin', 'role': 'admin'}
    assert users.authenticate(' admin ', '1234') is not None
    assert users.authenticate('admin', 'wrong') is None
    assert users.authenticate('nobody', '1234') is None
    assert users.authenticate('', '') is None


def test_login_is_audited(users, tmp_path):
    users.create_user('admin', '1234', 'admin')
    users.authenticate('admin', '1234')

    logs = AuditService(AuditRepository(str(tmp_path))).search_logs(user='admin')
    assert [log['message'] for log in logs] == ['Inicio de sesión de admin']
    assert logs[0]['type'] == 'SISTEMA'


def test_duplicate_and_invalid_users(users):
    assert users.create_user('kasir1', 'a')['ok'] is True
    assert users.create_user('kasir1', 'b')['ok'] is False
    assert users.create_user('', 'b')['ok'] is False
    assert users.create_user('kasir2', '')['ok'] is False


def test_unknown_role_falls_back_to_kasir(users):
    assert users.create_user('operador', '1234', 'China Import')['role'] == 'kasir'
    assert users.get_user('operador') == {'username': 'operador', 'role': 'kasir'}
    assert users.get_user('ghost') is None


def test_ensure_default_admin_only_on_empty_store(users):
    assert users.ensure_default_admin('admin', 'admin123') is True
    assert users.ensure_default_admin('root', 'x') is False
    assert users.get_user('admin')['role'] == 'admin'
    assert users.get_user('root') is None
