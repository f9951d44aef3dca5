"""Pytest configuration and fixtures."""

import pytest

from app import create_app, db


OGGI = '2025-03-15'


@pytest.fixture
def app():
    """Applicazione sulla configurazione di test (sqlite in memoria)."""
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _crea_utente(email, role, status='ATIVO', password='segreta'):
    from app.services.utenti.utenti_service import UtentiService

    success, message, utente = UtentiService().create_utente({
        'name': email.split('@')[0].title(),
        'email': email,
        'role': role,
        'status': status,
        'password': password,
    })
    assert success, message
    return utente


@pytest.fixture
def crea_utente(app):
    return _crea_utente


@pytest.fixture
def admin_client(app):
    """Client con una sessione ADMIN."""
    _crea_utente('admin@brastech.com', 'ADMIN')
    client = app.test_client()
    response = client.post('/login', json={'email': 'admin@brastech.com', 'password': 'segreta'})
    assert response.status_code == 200
    return client


@pytest.fixture
def viewer_client(app):
    """Client con una sessione VIEWER (sola lettura)."""
    _crea_utente('viewer@brastech.com', 'VIEWER')
    client = app.test_client()
    response = client.post('/login', json={'email': 'viewer@brastech.com', 'password': 'segreta'})
    assert response.status_code == 200
    return client


@pytest.fixture
def transazione_service(app):
    from app.services.transazioni.transazioni_service import TransazioneService

    return TransazioneService()


@pytest.fixture
def oggi():
    return OGGI
