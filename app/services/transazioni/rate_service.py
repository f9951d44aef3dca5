"""Rateizzazione di una conta a pagar in N rate mensili.

L'importo viene diviso in centesimi interi: ogni rata riceve la parte intera
della divisione e il resto va sulla prima rata, così la somma delle rate è
sempre uguale al totale al centesimo.
"""
from datetime import date, timedelta
from decimal import Decimal
import re
from dateutil.relativedelta import relativedelta
from app.defaults import SAIDA, PENDENTE, PAGO, LUNGHEZZA_DESCRIZIONE
from app.services import split_iso_date, leggi_campo
from app.services.transazioni.stato_service import valida_stato
from app.utils import ValidationUtils, SecurityUtils

POLICY_CLAMP = 'clamp'
POLICY_ROLLOVER = 'rollover'
POLICIES = (POLICY_CLAMP, POLICY_ROLLOVER)

MIN_RATE = 2
MAX_RATE = 36

# "Aluguel (3/12)" -> rata 3 di 12: esattamente il suffisso scritto da genera_rate
_SUFFISSO_RATA_RE = re.compile(r' \(([1-9]\d*)/([1-9]\d*)\)$')


def valida_numero_rate(numero, massimo=MAX_RATE):
    """Numero di rate intero in [2, massimo]"""
    if isinstance(numero, bool):
        raise ValueError("Numero di rate non valido")
    try:
        valore = int(str(numero).strip())
    except (TypeError, ValueError):
        raise ValueError("Numero di rate non valido")
    if valore < MIN_RATE or valore > massimo:
        raise ValueError(f"Il numero di rate deve essere compreso tra {MIN_RATE} e {massimo}")
    return valore


def dividi_importo(totale, numero, massimo=MAX_RATE):
    """Divide il totale in `numero` importi; il resto dei centesimi va alla prima rata."""
    totale = ValidationUtils.validate_amount(totale)
    numero = valida_numero_rate(numero, massimo)

    centesimi = int(totale * 100)
    base = centesimi // numero
    resto = centesimi - base * numero

    importo_base = Decimal(base) / 100
    importo_prima = Decimal(base + resto) / 100
    return [importo_prima.quantize(Decimal('0.01'))] + \
        [importo_base.quantize(Decimal('0.01'))] * (numero - 1)


def aggiungi_mesi(data_iso, mesi, policy=POLICY_CLAMP):
    """Sposta una data `YYYY-MM-DD` di `mesi` mesi di calendario.

    clamp:    31/01 + 1 mese -> 28/02 (o 29/02), ultimo giorno valido
    rollover: 31/01 + 1 mese -> 03/03 (o 02/03), i giorni in eccesso scivolano avanti
    """
    parti = split_iso_date(data_iso)
    if parti is None:
        raise ValueError(f"Data non valida: {data_iso!r}")
    inizio = date(*parti)

    if policy == POLICY_CLAMP:
        risultato = inizio + relativedelta(months=mesi)
    elif policy == POLICY_ROLLOVER:
        primo_del_mese = inizio.replace(day=1) + relativedelta(months=mesi)
        risultato = primo_del_mese + timedelta(days=inizio.day - 1)
    else:
        raise ValueError(f"Policy di overflow sconosciuta: {policy!r}")
    return risultato.isoformat()


def genera_rate(totale, numero, data_inizio, campi=None, stato_prima=None,
                policy=POLICY_CLAMP, massimo=MAX_RATE):
    """Genera le bozze delle rate mensili di una conta a pagar.

    - la rata i (da 0) scade `data_inizio` + i mesi;
    - la descrizione riceve il suffisso " (i+1/numero)";
    - la prima rata eredita lo stato scelto nel form (e la data di pagamento
      se PAGO), tutte le altre partono PENDENTE;
    - ogni bozza porta `installmentCurrent` / `installmentTotal`.

    Tutte le validazioni avvengono prima di costruire la lista: in caso di
    errore viene sollevato ValueError e non esiste alcuna bozza parziale.
    """
    campi = dict(campi or {})
    tipo = campi.get('type') or SAIDA
    if tipo != SAIDA:
        raise ValueError("La rateizzazione è disponibile solo per le contas a pagar (SAIDA)")

    data_inizio = ValidationUtils.validate_date(data_inizio, 'data della prima rata')
    importi = dividi_importo(totale, numero, massimo)
    numero = len(importi)
    stato_prima = valida_stato(SAIDA, stato_prima or PENDENTE)
    data_pagamento = ValidationUtils.validate_optional_date(campi.get('paymentDate'), 'data di pagamento')

    descrizione = SecurityUtils.sanitize_string(campi.get('description'))
    bozze = []
    for i, importo in enumerate(importi):
        prima = i == 0
        # il suffisso non deve mai essere troncato dal limite della colonna
        suffisso = f" ({i + 1}/{numero})"
        base = descrizione[:LUNGHEZZA_DESCRIZIONE - len(suffisso)].rstrip()
        bozze.append({
            'date': aggiungi_mesi(data_inizio, i, policy),
            'description': f"{base}{suffisso}",
            'entity': SecurityUtils.sanitize_string(campi.get('entity')),
            'amount': importo,
            'status': stato_prima if prima else PENDENTE,
            'type': SAIDA,
            'category': campi.get('category'),
            'paymentDate': data_pagamento if (prima and stato_prima == PAGO) else None,
            'payer': campi.get('payer') or None,
            'installmentCurrent': i + 1,
            'installmentTotal': numero,
        })
    return bozze


def estrai_rata(descrizione):
    """(rata corrente, totale rate) dal suffisso della descrizione, oppure None"""
    if not isinstance(descrizione, str):
        return None
    match = _SUFFISSO_RATA_RE.search(descrizione)
    if not match:
        return None
    corrente, totale = int(match.group(1)), int(match.group(2))
    if totale < MIN_RATE or not 1 <= corrente <= totale:
        return None
    return corrente, totale


def annota_rate(records):
    """Copie dei record con `installmentCurrent`/`installmentTotal` ricostruiti.

    Lo store non persiste i campi delle rate: vengono ricalcolati dalla
    descrizione dopo ogni lettura. I record in ingresso non vengono modificati.
    """
    annotati = []
    for r in records:
        copia = dict(r)
        rata = estrai_rata(leggi_campo(r, 'description'))
        if rata is not None:
            copia['installmentCurrent'], copia['installmentTotal'] = rata
        annotati.append(copia)
    return annotati
