"""Tests for the installment splitter."""

from decimal import Decimal

import pytest

from app.services.transazioni.rate_service import (
    aggiungi_mesi,
    annota_rate,
    dividi_importo,
    estrai_rata,
    genera_rate,
)


class TestDividiImporto:
    def test_remainder_goes_to_first_installment(self):
        assert dividi_importo('100.00', 3) == [Decimal('33.34'), Decimal('33.33'), Decimal('33.33')]

    @pytest.mark.parametrize('totale,numero', [
        ('100.00', 3),
        ('0.05', 4),
        ('1999.99', 12),
        ('0', 2),
        ('12345.67', 36),
    ])
    def test_parts_sum_exactly_to_total(self, totale, numero):
        parti = dividi_importo(totale, numero)

        assert len(parti) == numero
        assert sum(parti) == Decimal(totale)
        assert all(parti[0] >= p for p in parti)

    @pytest.mark.parametrize('numero', [1, 0, -3, 37, 'abc', None, True])
    def test_installment_count_out_of_range(self, numero):
        with pytest.raises(ValueError):
            dividi_importo('100', numero)

    def test_configurable_maximum(self):
        with pytest.raises(ValueError):
            dividi_importo('100', 13, massimo=12)

    @pytest.mark.parametrize('totale', ['-10', 'abc', '10.001', None])
    def test_invalid_total(self, totale):
        with pytest.raises(ValueError):
            dividi_importo(totale, 3)


class TestAggiungiMesi:
    def test_clamp_keeps_last_valid_day(self):
        assert aggiungi_mesi('2025-01-31', 1, 'clamp') == '2025-02-28'
        assert aggiungi_mesi('2024-01-31', 1, 'clamp') == '2024-02-29'

    def test_rollover_spills_into_next_month(self):
        assert aggiungi_mesi('2025-01-31', 1, 'rollover') == '2025-03-03'
        assert aggiungi_mesi('2024-01-31', 1, 'rollover') == '2024-03-02'

    def test_year_boundary(self):
        assert aggiungi_mesi('2025-11-15', 3) == '2026-02-15'

    def test_zero_months_is_identity(self):
        assert aggiungi_mesi('2025-01-31', 0, 'rollover') == '2025-01-31'

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            aggiungi_mesi('2025-01-31', 1, 'wrap')


class TestGeneraRate:
    def _campi(self, **kwargs):
        campi = {
            'description': 'Notebook',
            'entity': 'Loja',
            'category': 'Equipamentos',
            'payer': 'Bruno',
            'type': 'SAIDA',
        }
        campi.update(kwargs)
        return campi

    def test_builds_monthly_drafts(self):
        bozze = genera_rate('100.00', 3, '2025-01-31', campi=self._campi())

        assert [b['date'] for b in bozze] == ['2025-01-31', '2025-02-28', '2025-03-31']
        assert [b['description'] for b in bozze] == ['Notebook (1/3)', 'Notebook (2/3)', 'Notebook (3/3)']
        assert [b['amount'] for b in bozze] == [Decimal('33.34'), Decimal('33.33'), Decimal('33.33')]
        assert [b['installmentCurrent'] for b in bozze] == [1, 2, 3]
        assert all(b['installmentTotal'] == 3 for b in bozze)
        assert all(b['type'] == 'SAIDA' and b['payer'] == 'Bruno' for b in bozze)

    def test_only_first_installment_carries_form_status(self):
        bozze = genera_rate('90', 3, '2025-01-10',
                            campi=self._campi(paymentDate='2025-01-10'), stato_prima='PAGO')

        assert [b['status'] for b in bozze] == ['PAGO', 'PENDENTE', 'PENDENTE']
        assert [b['paymentDate'] for b in bozze] == ['2025-01-10', None, None]

    def test_rollover_policy(self):
        bozze = genera_rate('20', 2, '2025-01-31', campi=self._campi(), policy='rollover')

        assert [b['date'] for b in bozze] == ['2025-01-31', '2025-03-03']

    def test_entrada_is_rejected(self):
        with pytest.raises(ValueError):
            genera_rate('100', 2, '2025-01-01', campi=self._campi(type='ENTRADA'))

    def test_invalid_start_date_is_rejected(self):
        with pytest.raises(ValueError):
            genera_rate('100', 2, '2025-02-30', campi=self._campi())

    def test_long_description_is_cut_before_the_suffix(self):
        bozze = genera_rate('120', 12, '2025-01-10', campi=self._campi(description='a' * 198))

        assert all(len(b['description']) == 200 for b in bozze)
        assert bozze[0]['description'].endswith('a (1/12)')
        assert [estrai_rata(b['description']) for b in bozze] == [(i, 12) for i in range(1, 13)]


class TestRateDallaDescrizione:
    def test_suffix_is_parsed(self):
        assert estrai_rata('Aluguel (3/12)') == (3, 12)

    @pytest.mark.parametrize('descrizione', [
        'Aluguel', 'Aluguel (0/12)', 'Aluguel (13/12)', 'Aluguel (1/1)', None,
        'Curso(1/2)', 'Curso (01/02)', 'Curso (1/2) extra', 'Curso (1 / 2)',
    ])
    def test_not_an_installment(self, descrizione):
        assert estrai_rata(descrizione) is None

    def test_annota_rate_does_not_mutate_input(self):
        righe = [{'id': 1, 'description': 'Notebook (2/3)'}, {'id': 2, 'description': 'Luz'}]

        annotate = annota_rate(righe)

        assert annotate[0]['installmentCurrent'] == 2
        assert annotate[0]['installmentTotal'] == 3
        assert 'installmentCurrent' not in annotate[1]
        assert 'installmentCurrent' not in righe[0]
