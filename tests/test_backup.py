"""Tests for the backup export and connection check."""

import io
from datetime import datetime
from unittest.mock import patch

import openpyxl

from app import db
from app.services.sistema.backup_service import BackupService
from app.services.transazioni.transazioni_service import TransazioneService


def _popola():
    TransazioneService().create_transazione(
        {'type': 'SAIDA', 'date': '2025-03-20', 'description': 'Luz', 'amount': '120.50'}, '2025-03-15')


def test_esporta_json(app, crea_utente):
    _popola()
    crea_utente('admin@brastech.com', 'ADMIN')

    dati = BackupService().esporta_json(adesso=datetime(2025, 3, 15, 10, 0))

    assert dati['exportDate'] == '2025-03-15T10:00:00'
    assert dati['source'] == 'brastech-financeiro'
    assert dati['transactions'][0]['description'] == 'Luz'
    assert dati['clients'] == []
    assert 'password' not in dati['users'][0]


def test_esporta_xlsx_has_one_sheet_per_collection(app):
    _popola()

    contenuto = BackupService().esporta_xlsx()

    wb = openpyxl.load_workbook(io.BytesIO(contenuto))
    assert wb.sheetnames == ['transactions', 'clients', 'users']
    ws = wb['transactions']
    assert ws.cell(row=1, column=3).value == 'description'
    assert ws.cell(row=2, column=3).value == 'Luz'
    assert ws.cell(row=2, column=5).value == 120.5
    assert wb['clients'].max_row == 1


def test_verifica_connessione(app):
    assert BackupService().verifica_connessione()[0]

    with patch.object(db.session, 'execute', side_effect=RuntimeError('offline')):
        success, message = BackupService().verifica_connessione()

    assert not success
    assert 'offline' in message
