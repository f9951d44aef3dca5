"""Derivazione dello stato delle transazioni a partire dalle date.

Regole (solo SAIDA, contas a pagar):
- data di pagamento valorizzata  -> PAGO
- altrimenti scadenza < oggi     -> ATRASADO
- altrimenti                     -> PENDENTE

Le ENTRADA non vengono derivate dalle date: partono da AGUARDANDO e lo stato
viene poi scelto dall'utente.

Il confronto tra date è un confronto lessicografico tra stringhe `YYYY-MM-DD`
(valido perché il formato è a larghezza fissa). "Oggi" è sempre un parametro,
calcolato nel fuso locale con `oggi_locale`.
"""
from datetime import datetime
from dateutil import tz
from app.defaults import ENTRADA, SAIDA, PAGO, PENDENTE, ATRASADO, AGUARDANDO, STATI_PER_TIPO
from app.services import normalizza_iso, leggi_campo


def oggi_locale(tz_name=None, now=None):
    """Restituisce la data odierna `YYYY-MM-DD` nel fuso locale (mai UTC)."""
    zona = tz.gettz(tz_name) if tz_name else None
    if zona is None:
        zona = tz.tzlocal()
    if now is None:
        now = datetime.now(zona)
    else:
        now = now.astimezone(zona)
    return now.strftime('%Y-%m-%d')


def oggi_app():
    """Data odierna usando `APP_TIMEZONE` della app corrente"""
    from flask import current_app
    return oggi_locale(current_app.config.get('APP_TIMEZONE'))


def _valorizzato(valore):
    if valore is None:
        return False
    if isinstance(valore, str):
        return bool(valore.strip())
    return True


def _prima_di(data, oggi):
    """True solo se entrambe le date sono valide e data < oggi"""
    data_iso = normalizza_iso(data)
    oggi_iso = normalizza_iso(oggi)
    if data_iso is None or oggi_iso is None:
        return False
    return data_iso < oggi_iso


def deriva_stato_saida(data, data_pagamento, oggi):
    """Stato di una conta a pagar. Una scadenza non valida non è mai ATRASADO."""
    if _valorizzato(data_pagamento):
        return PAGO
    if _prima_di(data, oggi):
        return ATRASADO
    return PENDENTE


def stati_validi(tipo):
    try:
        return STATI_PER_TIPO[tipo]
    except KeyError:
        raise ValueError(f"Tipo di transazione non valido: {tipo!r}")


def valida_stato(tipo, stato):
    """Verifica che lo stato appartenga al vocabolario del tipo"""
    if stato not in stati_validi(tipo):
        raise ValueError(f"Stato {stato!r} non valido per {tipo}")
    return stato


def stato_predefinito(tipo):
    """Stato iniziale del form: AGUARDANDO per le entrate, PENDENTE per le uscite"""
    stati_validi(tipo)
    return AGUARDANDO if tipo == ENTRADA else PENDENTE


def stato_iniziale(tipo, data, data_pagamento, stato, oggi):
    """Stato da salvare alla creazione.

    Uno stato esplicito scelto dall'utente vince (se valido per il tipo);
    altrimenti SAIDA viene derivata dalle date ed ENTRADA parte da AGUARDANDO.
    """
    if stato:
        return valida_stato(tipo, stato)
    if tipo == SAIDA:
        return deriva_stato_saida(data, data_pagamento, oggi)
    return stato_predefinito(tipo)


def stato_dopo_scadenza(tipo, nuova_data, data_pagamento, stato_attuale, oggi):
    """Stato dopo la modifica della data di scadenza"""
    if tipo == SAIDA and not _valorizzato(data_pagamento):
        return deriva_stato_saida(nuova_data, None, oggi)
    return stato_attuale


def stato_dopo_pagamento(tipo, data, nuova_data_pagamento, stato_attuale, oggi):
    """Stato dopo la modifica (o la cancellazione) della data di pagamento.

    Se la scadenza manca si usa oggi, quindi il risultato è PENDENTE.
    """
    if tipo != SAIDA:
        return stato_attuale
    return deriva_stato_saida(data or oggi, nuova_data_pagamento, oggi)


def seleziona_scadute(records, oggi):
    """Uscite ancora PENDENTE con scadenza passata e senza data di pagamento.

    Sono le sole righe toccate dalla riconciliazione: dopo l'aggiornamento
    non sono più PENDENTE, quindi un secondo passaggio non trova nulla.
    """
    scadute = []
    for r in records:
        if leggi_campo(r, 'type') != SAIDA:
            continue
        if leggi_campo(r, 'status') != PENDENTE:
            continue
        if _valorizzato(leggi_campo(r, 'paymentDate')):
            continue
        if _prima_di(leggi_campo(r, 'date'), oggi):
            scadute.append(r)
    return scadute
