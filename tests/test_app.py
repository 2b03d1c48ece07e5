"""
Tests for the application factory and its configuration.
"""
import pytest

from bplog import create_app


def test_config_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv('BP_DATA_FILE', str(tmp_path / 'env.csv'))
    monkeypatch.setenv('HISTORY_LIMIT', '25')
    app = create_app({'AUDIT_LOG_FILE': str(tmp_path / 'audit.log')})
    assert app.config['DATA_FILE'] == str(tmp_path / 'env.csv')
    assert app.config['HISTORY_LIMIT'] == 25


def test_invalid_history_limit(monkeypatch):
    monkeypatch.setenv('HISTORY_LIMIT', 'many')
    with pytest.raises(RuntimeError):
        create_app()


def test_non_positive_history_limit(tmp_path):
    with pytest.raises(RuntimeError):
        create_app({'HISTORY_LIMIT': 0, 'AUDIT_LOG_FILE': str(tmp_path / 'audit.log')})


def test_security_headers(client):
    resp = client.get('/health')
    assert resp.headers['X-Content-Type-Options'] == 'nosniff'
    assert resp.headers['X-Frame-Options'] == 'DENY'
