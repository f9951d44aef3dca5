"""Vista in memoria delle transazioni lato chiamante.

Tiene la lista dei record caricati e applica le scritture in modo ottimistico:
la modifica viene applicata subito alla lista locale, poi inviata allo store;
se lo store conferma, il record confermato sostituisce quello locale, se lo
store fallisce la modifica locale viene annullata.

Le ricariche sono numerate: vince l'ultima avviata, non l'ultima terminata.
Ogni ricarica riconcilia prima le uscite scadute (PENDENTE -> ATRASADO).

È la libreria lato chiamante per chi tiene la lista in memoria tra più
operazioni (lo script `scripts/aggiorna_scadute.py`, client Python); i
blueprint JSON sono senza stato e usano direttamente TransazioneService.
"""
import logging
from app.services import leggi_campo

logger = logging.getLogger(__name__)


def carica_tutto(transazioni_service, clienti_service, utenti_service):
    """Legge le tre collezioni e le restituisce insieme.

    Nessun dato derivato viene calcolato prima che tutte e tre le letture
    siano terminate; una lettura fallita vale una lista vuota.
    """
    transazioni = transazioni_service.list_transazioni()
    clienti = clienti_service.list_clienti()
    utenti = utenti_service.list_utenti()
    return {
        'transactions': transazioni,
        'clients': clienti,
        'users': utenti,
    }


class VistaTransazioni:
    """Lista locale delle transazioni con aggiornamenti ottimistici"""

    def __init__(self, service=None):
        if service is None:
            from app.services.transazioni.transazioni_service import TransazioneService
            service = TransazioneService()
        self.service = service
        self.records = []
        self.errore = None
        self._generazione = 0

    # === Ricarica ===

    def inizia_ricarica(self):
        """Avvia una ricarica e restituisce il suo numero"""
        self._generazione += 1
        return self._generazione

    def applica_ricarica(self, token, righe):
        """Applica il risultato di una ricarica se nel frattempo non ne è partita un'altra"""
        if token != self._generazione:
            logger.debug('Ricarica %s scartata (corrente: %s)', token, self._generazione)
            return False
        self.records = list(righe)
        self.errore = None
        return True

    def ricarica(self, oggi=None):
        """Riconcilia le scadute e poi ricarica la lista"""
        success, message, _ = self.service.aggiorna_scadute(oggi)
        if not success:
            logger.warning('Riconciliazione delle scadute non riuscita: %s', message)
        return self._carica()

    def _carica(self):
        token = self.inizia_ricarica()
        success, risultato = self.service.carica_transazioni()
        if not success:
            if token == self._generazione:
                self.errore = risultato
            return False
        return self.applica_ricarica(token, risultato)

    # === Lettura ===

    def _indice(self, transazione_id):
        for i, r in enumerate(self.records):
            if str(leggi_campo(r, 'id')) == str(transazione_id):
                return i
        return None

    def trova(self, transazione_id):
        indice = self._indice(transazione_id)
        return None if indice is None else self.records[indice]

    def per_tipo(self, tipo):
        return [r for r in self.records if leggi_campo(r, 'type') == tipo]

    # === Scritture ===

    def _patch_ottimistico(self, transazione_id, patch, scrittura):
        """Applica `patch` in locale, esegue `scrittura` e riconcilia il risultato"""
        indice = self._indice(transazione_id)
        if indice is None:
            return False, "Transazione non trovata", None

        precedente = self.records[indice]
        self.records[indice] = {**precedente, **patch}

        success, message, confermato = scrittura()
        # la lista potrebbe essere stata sostituita da una ricarica nel frattempo
        indice = self._indice(transazione_id)
        if success:
            if indice is not None and confermato is not None:
                self.records[indice] = confermato
            return True, message, confermato

        logger.warning('Scrittura fallita per la transazione %s, modifica annullata: %s',
                       transazione_id, message)
        if indice is not None:
            self.records[indice] = precedente
        self.errore = message
        return False, message, None

    def aggiorna(self, record, oggi=None):
        """Modifica completa di una transazione"""
        return self._patch_ottimistico(
            record.get('id'),
            record,
            lambda: self.service.update_transazione(record, oggi),
        )

    def aggiorna_stato(self, transazione_id, stato):
        return self._patch_ottimistico(
            transazione_id,
            {'status': stato},
            lambda: self.service.aggiorna_stato(transazione_id, stato),
        )

    def aggiorna_data_pagamento(self, transazione_id, nuova_data, oggi=None):
        return self._patch_ottimistico(
            transazione_id,
            {'paymentDate': nuova_data or None},
            lambda: self.service.aggiorna_data_pagamento(transazione_id, nuova_data, oggi),
        )

    def aggiorna_scadenza(self, transazione_id, nuova_data, oggi=None):
        return self._patch_ottimistico(
            transazione_id,
            {'date': nuova_data},
            lambda: self.service.aggiorna_scadenza(transazione_id, nuova_data, oggi),
        )

    def elimina(self, transazione_id):
        """Rimuove subito la riga; la reinserisce se lo store fallisce"""
        indice = self._indice(transazione_id)
        if indice is None:
            return False, "Transazione non trovata"
        rimosso = self.records.pop(indice)

        success, message = self.service.delete_transazione(transazione_id)
        if not success:
            logger.warning('Eliminazione fallita per la transazione %s: %s', transazione_id, message)
            self.records.insert(min(indice, len(self.records)), rimosso)
            self.errore = message
        return success, message

    def aggiungi(self, bozza, oggi=None):
        """Le nuove righe entrano nella lista solo dopo la conferma dello store (serve l'id)"""
        success, message, record = self.service.create_transazione(bozza, oggi)
        if success:
            self.records.insert(0, record)
        else:
            self.errore = message
        return success, message, record

    def aggiungi_rateizzata(self, dati, numero, oggi=None, **kwargs):
        success, message, records = self.service.create_rateizzata(dati, numero, oggi, **kwargs)
        if success:
            self.records[:0] = records
        else:
            self.errore = message
        return success, message, records

    def aggiorna_scadute(self, oggi=None):
        """Riconciliazione delle scadute: una scrittura in blocco, poi una sola ricarica"""
        success, message, numero = self.service.aggiorna_scadute(oggi)
        if not success:
            self.errore = message
            return False, message, 0
        if numero:
            self._carica()
        return True, message, numero
