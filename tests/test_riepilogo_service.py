"""Tests for the dashboard aggregator."""

import copy
from decimal import Decimal

from app.services.transazioni.riepilogo_service import (
    anni_disponibili,
    coerce_importo,
    dettaglio_mensile,
    predicato_stato,
    raggruppa_per_data,
    serie_annuale,
    totali_annuali,
)


def _record(date, type, amount, status='PAGO', category='Geral', **kwargs):
    record = {'date': date, 'type': type, 'amount': amount, 'status': status, 'category': category}
    record.update(kwargs)
    return record


RECORDS = [
    _record('2025-03-05', 'ENTRADA', 500),
    _record('2025-03-10', 'SAIDA', 100, category='Aluguel'),
    _record('2025-03-20', 'SAIDA', 50, category='Aluguel'),
    _record('2025-03-21', 'SAIDA', 80, status='PENDENTE', category='Luz'),
    _record('2024-12-31', 'SAIDA', 999),
    _record('not-a-date', 'ENTRADA', 1000),
]


class TestSerieAnnuale:
    def test_march_scenario(self):
        serie = serie_annuale(RECORDS, 2025)

        assert len(serie) == 12
        marzo = serie[2]
        assert marzo['label'] == 'MAR'
        assert marzo['income'] == Decimal('500')
        assert marzo['expense'] == Decimal('150')
        assert marzo['balance'] == Decimal('350')
        for mese in serie[:2] + serie[3:]:
            assert mese['income'] == mese['expense'] == mese['balance'] == 0

    def test_all_statuses_predicate(self):
        serie = serie_annuale(RECORDS, 2025, predicato_stato(include_all_statuses=True))

        assert serie[2]['expense'] == Decimal('230')

    def test_input_is_not_mutated_and_result_is_stable(self):
        originali = copy.deepcopy(RECORDS)

        prima = serie_annuale(RECORDS, 2025)
        seconda = serie_annuale(RECORDS, 2025)

        assert prima == seconda
        assert RECORDS == originali

    def test_invalid_date_is_excluded(self):
        totali = totali_annuali(RECORDS, 2025)

        assert totali['income'] == Decimal('500')
        assert totali['balance'] == Decimal('350')


class TestDettaglioMensile:
    def test_groups_by_category(self):
        dettaglio = dettaglio_mensile(RECORDS, 2025, 3)

        assert dettaglio['expenseByCategory'] == {'Aluguel': Decimal('150')}
        assert dettaglio['incomeByCategory'] == {'Geral': Decimal('500')}
        assert dettaglio['balance'] == Decimal('350')

    def test_missing_category_uses_fallback(self):
        records = [_record('2025-03-01', 'SAIDA', 10, category=None),
                   _record('2025-03-02', 'SAIDA', 5, category='  ')]

        dettaglio = dettaglio_mensile(records, 2025, 3, categoria_default='Outros')

        assert dettaglio['expenseByCategory'] == {'Outros': Decimal('15')}

    def test_empty_month(self):
        dettaglio = dettaglio_mensile(RECORDS, 2025, 7)

        assert dettaglio['totalIncome'] == dettaglio['totalExpense'] == 0
        assert dettaglio['expenseByCategory'] == {}


class TestCoerceImporto:
    def test_values(self):
        assert coerce_importo('1.234,56') == Decimal('1234.56')
        assert coerce_importo('10,5') == Decimal('10.5')
        assert coerce_importo(0.1) == Decimal('0.1')
        assert coerce_importo('abc') == 0
        assert coerce_importo(None) == 0
        assert coerce_importo(float('nan')) == 0
        assert coerce_importo([1]) == 0


def test_anni_disponibili():
    assert anni_disponibili(RECORDS) == [2024, 2025]


def test_raggruppa_per_data_newest_first():
    records = [
        _record('2025-03-01', 'SAIDA', 1, id=1),
        _record('bad', 'SAIDA', 1, id=2),
        _record('2025-03-10', 'SAIDA', 1, id=3),
        _record('2025-03-10', 'SAIDA', 1, id=4),
        _record('2025-03-11', 'ENTRADA', 1, id=5),
    ]

    gruppi = raggruppa_per_data(records, 'SAIDA')

    assert [g['date'] for g in gruppi] == ['2025-03-10', '2025-03-01', None]
    assert [r['id'] for r in gruppi[0]['items']] == [3, 4]
    assert [r['id'] for r in gruppi[2]['items']] == [2]
