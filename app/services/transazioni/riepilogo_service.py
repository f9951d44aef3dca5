"""Riepiloghi per la dashboard: serie annuale, totali per anno, dettaglio mensile per categoria.

Tutte le funzioni sono pure: ricevono la lista di transazioni già caricata
(dict dello store o oggetti ORM) e non la modificano. Le date vengono lette
spezzando la stringa `YYYY-MM-DD`; date non valide vengono escluse e importi
non numerici contano zero, senza mai sollevare eccezioni.

Quali stati contano nei totali è una scelta esplicita del chiamante
(`predicato_stato`): di default solo le transazioni PAGO.
"""
from decimal import Decimal, InvalidOperation
from app.defaults import ENTRADA, SAIDA, PAGO, MESI
from app.services import split_iso_date, normalizza_iso, leggi_campo

ZERO = Decimal('0')
CATEGORIA_DEFAULT = 'Geral'


def coerce_importo(valore):
    """Converte l'importo letto dallo store in Decimal; non numerico -> 0"""
    if valore is None or isinstance(valore, bool):
        return ZERO
    try:
        if isinstance(valore, Decimal):
            importo = valore
        elif isinstance(valore, int):
            importo = Decimal(valore)
        elif isinstance(valore, float):
            importo = Decimal(repr(valore))
        elif isinstance(valore, str):
            testo = valore.strip()
            if not testo:
                return ZERO
            # formato brasiliano "1.234,56"
            if ',' in testo and '.' in testo:
                testo = testo.replace('.', '').replace(',', '.')
            else:
                testo = testo.replace(',', '.')
            importo = Decimal(testo)
        else:
            return ZERO
    except (InvalidOperation, ValueError):
        return ZERO
    if not importo.is_finite():
        return ZERO
    return importo


def estrai_anno_mese(data):
    """(anno, mese) da una data `YYYY-MM-DD`, oppure None"""
    parti = split_iso_date(data)
    if parti is None:
        return None
    return parti[0], parti[1]


def solo_pagate(record):
    return leggi_campo(record, 'status') == PAGO


def tutti_gli_stati(record):
    return True


def predicato_stato(include_all_statuses=False):
    """Filtro sugli stati da usare nei riepiloghi"""
    return tutti_gli_stati if include_all_statuses else solo_pagate


def _categoria(record, categoria_default):
    valore = leggi_campo(record, 'category')
    if not isinstance(valore, str) or not valore.strip():
        return categoria_default
    return valore.strip()


def serie_annuale(records, anno, predicato=None):
    """12 mesi (gennaio..dicembre) con entrate, uscite e saldo dell'anno richiesto"""
    predicato = predicato or solo_pagate
    mesi = [
        {
            'year': anno,
            'month': i + 1,
            'label': MESI[i],
            'income': ZERO,
            'expense': ZERO,
            'balance': ZERO,
        }
        for i in range(12)
    ]

    for r in records:
        anno_mese = estrai_anno_mese(leggi_campo(r, 'date'))
        if anno_mese is None or anno_mese[0] != anno:
            continue
        if not predicato(r):
            continue
        tipo = leggi_campo(r, 'type')
        importo = coerce_importo(leggi_campo(r, 'amount'))
        bucket = mesi[anno_mese[1] - 1]
        if tipo == ENTRADA:
            bucket['income'] += importo
        elif tipo == SAIDA:
            bucket['expense'] += importo

    for bucket in mesi:
        bucket['balance'] = bucket['income'] - bucket['expense']
    return mesi


def totali_annuali(records, anno, predicato=None):
    """Totali dell'anno (somma della serie annuale)"""
    serie = serie_annuale(records, anno, predicato)
    entrate = sum((m['income'] for m in serie), ZERO)
    uscite = sum((m['expense'] for m in serie), ZERO)
    return {
        'year': anno,
        'income': entrate,
        'expense': uscite,
        'balance': entrate - uscite,
    }


def dettaglio_mensile(records, anno, mese, predicato=None, categoria_default=CATEGORIA_DEFAULT):
    """Entrate e uscite di un mese (1-12) raggruppate per categoria"""
    predicato = predicato or solo_pagate
    entrate_per_categoria = {}
    uscite_per_categoria = {}
    totale_entrate = ZERO
    totale_uscite = ZERO

    for r in records:
        if estrai_anno_mese(leggi_campo(r, 'date')) != (anno, mese):
            continue
        if not predicato(r):
            continue
        tipo = leggi_campo(r, 'type')
        importo = coerce_importo(leggi_campo(r, 'amount'))
        categoria = _categoria(r, categoria_default)
        if tipo == ENTRADA:
            entrate_per_categoria[categoria] = entrate_per_categoria.get(categoria, ZERO) + importo
            totale_entrate += importo
        elif tipo == SAIDA:
            uscite_per_categoria[categoria] = uscite_per_categoria.get(categoria, ZERO) + importo
            totale_uscite += importo

    return {
        'year': anno,
        'month': mese,
        'incomeByCategory': entrate_per_categoria,
        'expenseByCategory': uscite_per_categoria,
        'totalIncome': totale_entrate,
        'totalExpense': totale_uscite,
        'balance': totale_entrate - totale_uscite,
    }


def anni_disponibili(records):
    """Anni presenti nelle transazioni (date valide), in ordine crescente"""
    anni = set()
    for r in records:
        anno_mese = estrai_anno_mese(leggi_campo(r, 'date'))
        if anno_mese is not None:
            anni.add(anno_mese[0])
    return sorted(anni)


def raggruppa_per_data(records, tipo):
    """Transazioni di un tipo, dalla più recente, raggruppate per giorno.

    Le righe con data non valida finiscono in fondo in un gruppo con data None.
    """
    filtrate = [r for r in records if leggi_campo(r, 'type') == tipo]
    ordinate = sorted(
        filtrate,
        key=lambda r: normalizza_iso(leggi_campo(r, 'date')) or '',
        reverse=True,
    )

    gruppi = []
    for r in ordinate:
        giorno = normalizza_iso(leggi_campo(r, 'date'))
        if gruppi and gruppi[-1]['date'] == giorno:
            gruppi[-1]['items'].append(r)
        else:
            gruppi.append({'date': giorno, 'items': [r]})
    return gruppi
