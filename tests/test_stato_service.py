"""Tests for status derivation and the overdue selection."""

from datetime import datetime, timezone

import pytest

from app.services.transazioni.stato_service import (
    deriva_stato_saida,
    oggi_locale,
    seleziona_scadute,
    stato_dopo_pagamento,
    stato_dopo_scadenza,
    stato_iniziale,
    stato_predefinito,
    valida_stato,
)

OGGI = '2025-03-15'


class TestDerivaStatoSaida:
    def test_payment_date_means_paid(self):
        assert deriva_stato_saida('2025-01-01', '2025-01-02', OGGI) == 'PAGO'

    def test_past_due_date_is_overdue(self):
        assert deriva_stato_saida('2025-03-14', None, OGGI) == 'ATRASADO'

    def test_due_today_is_never_overdue(self):
        assert deriva_stato_saida(OGGI, None, OGGI) == 'PENDENTE'

    def test_future_due_date_is_pending(self):
        assert deriva_stato_saida('2025-04-01', '', OGGI) == 'PENDENTE'

    def test_invalid_due_date_is_pending(self):
        assert deriva_stato_saida('not-a-date', None, OGGI) == 'PENDENTE'

    def test_blank_payment_date_is_ignored(self):
        assert deriva_stato_saida('2025-03-01', '   ', OGGI) == 'ATRASADO'


class TestStatoIniziale:
    def test_entrada_defaults_to_awaiting(self):
        assert stato_iniziale('ENTRADA', '2020-01-01', None, None, OGGI) == 'AGUARDANDO'

    def test_saida_is_derived_without_explicit_status(self):
        assert stato_iniziale('SAIDA', '2025-03-01', None, None, OGGI) == 'ATRASADO'

    def test_explicit_status_wins(self):
        assert stato_iniziale('SAIDA', '2025-03-01', None, 'PAGO', OGGI) == 'PAGO'

    def test_status_outside_vocabulary_is_rejected(self):
        with pytest.raises(ValueError):
            stato_iniziale('ENTRADA', OGGI, None, 'PENDENTE', OGGI)

    def test_predefined_status(self):
        assert stato_predefinito('ENTRADA') == 'AGUARDANDO'
        assert stato_predefinito('SAIDA') == 'PENDENTE'

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValueError):
            valida_stato('TRANSFER', 'PAGO')


class TestTransizioni:
    def test_due_date_moved_to_past_becomes_overdue(self):
        assert stato_dopo_scadenza('SAIDA', '2025-03-01', None, 'PENDENTE', OGGI) == 'ATRASADO'

    def test_due_date_moved_to_future_becomes_pending(self):
        assert stato_dopo_scadenza('SAIDA', '2025-05-01', None, 'ATRASADO', OGGI) == 'PENDENTE'

    def test_due_date_change_keeps_paid_record(self):
        assert stato_dopo_scadenza('SAIDA', '2025-03-01', '2025-03-02', 'PAGO', OGGI) == 'PAGO'

    def test_due_date_change_leaves_entrada_alone(self):
        assert stato_dopo_scadenza('ENTRADA', '2025-01-01', None, 'AGUARDANDO', OGGI) == 'AGUARDANDO'

    def test_setting_payment_date_marks_paid(self):
        assert stato_dopo_pagamento('SAIDA', '2025-03-01', '2025-03-10', 'ATRASADO', OGGI) == 'PAGO'

    def test_clearing_payment_date_rederives(self):
        assert stato_dopo_pagamento('SAIDA', '2025-03-01', None, 'PAGO', OGGI) == 'ATRASADO'
        assert stato_dopo_pagamento('SAIDA', '2025-04-01', '', 'PAGO', OGGI) == 'PENDENTE'

    def test_clearing_payment_date_without_due_date_is_pending(self):
        assert stato_dopo_pagamento('SAIDA', None, None, 'PAGO', OGGI) == 'PENDENTE'


def test_seleziona_scadute_only_pending_past_due_saida():
    records = [
        {'id': 1, 'type': 'SAIDA', 'status': 'PENDENTE', 'date': '2025-03-01', 'paymentDate': None},
        {'id': 2, 'type': 'SAIDA', 'status': 'PENDENTE', 'date': OGGI, 'paymentDate': None},
        {'id': 3, 'type': 'SAIDA', 'status': 'PAGO', 'date': '2025-03-01', 'paymentDate': '2025-03-01'},
        {'id': 4, 'type': 'ENTRADA', 'status': 'AGUARDANDO', 'date': '2025-03-01', 'paymentDate': None},
        {'id': 5, 'type': 'SAIDA', 'status': 'PENDENTE', 'date': 'not-a-date', 'paymentDate': None},
        {'id': 6, 'type': 'SAIDA', 'status': 'PENDENTE', 'date': '2025-02-01', 'paymentDate': '2025-02-01'},
    ]

    assert [r['id'] for r in seleziona_scadute(records, OGGI)] == [1]


def test_oggi_locale_uses_local_day_not_utc():
    # 02:30 UTC del 16 marzo sono ancora le 23:30 del 15 a San Paolo
    adesso = datetime(2025, 3, 16, 2, 30, tzinfo=timezone.utc)

    assert oggi_locale('America/Sao_Paulo', now=adesso) == '2025-03-15'
    assert oggi_locale('UTC', now=adesso) == '2025-03-16'
