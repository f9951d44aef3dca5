"""Servizio per la gestione delle transazioni (contas a pagar / a receber).

È il collaboratore di persistenza: legge e scrive la tabella `transactions` e
restituisce righe nel formato dello store (dict con chiavi camelCase e date
stringa). Le scritture restituiscono sempre `(success, message, record)`;
in caso di errore la sessione viene annullata e nessuna modifica resta
applicata.
"""
import logging
from app.models.Transazioni import Transazioni
from app.defaults import ENTRADA, SAIDA, PENDENTE, ATRASADO, TIPI_TRANSAZIONE, PAGATORI, LUNGHEZZA_DESCRIZIONE
from app.services import BaseService
from app.services.transazioni.stato_service import (
    oggi_app, stato_iniziale, valida_stato, stato_dopo_pagamento,
    stato_dopo_scadenza, seleziona_scadute,
)
from app.services.transazioni.rate_service import (
    genera_rate, annota_rate, POLICY_CLAMP, MAX_RATE,
)
from app.services.transazioni.riepilogo_service import CATEGORIA_DEFAULT
from app.utils import ValidationUtils, SecurityUtils

logger = logging.getLogger(__name__)

# Campi calcolati lato client che non esistono nella tabella
_CAMPI_NON_PERSISTITI = ('id', 'installmentCurrent', 'installmentTotal')


class TransazioneService(BaseService):
    """Servizio per la gestione delle transazioni"""

    def __init__(self, categoria_default=CATEGORIA_DEFAULT):
        super().__init__()
        self.categoria_default = categoria_default

    # === Lettura ===

    def carica_transazioni(self):
        """Carica tutte le transazioni: (True, righe) oppure (False, messaggio)"""
        try:
            righe = Transazioni.query.order_by(Transazioni.date.desc(), Transazioni.id.desc()).all()
            return True, annota_rate([t.to_dict() for t in righe])
        except Exception as e:
            logger.warning('Errore nel caricamento delle transazioni: %s', e)
            return False, str(e)

    def list_transazioni(self):
        """Come carica_transazioni, ma in caso di errore restituisce una lista vuota"""
        success, risultato = self.carica_transazioni()
        return risultato if success else []

    def get_by_id(self, transazione_id):
        try:
            return self.db.session.get(Transazioni, int(transazione_id))
        except (TypeError, ValueError):
            return None

    # === Validazione ===

    def prepara_bozza(self, dati, oggi, stato_corrente=None):
        """Valida e normalizza i dati di una transazione prima di scriverla.

        Solleva ValueError alla prima violazione: niente viene scritto.
        """
        tipo = ValidationUtils.validate_choice(dati.get('type'), TIPI_TRANSAZIONE, 'tipo')
        data = ValidationUtils.validate_date(dati.get('date'), 'data')
        descrizione = ValidationUtils.validate_required_field(dati.get('description'), 'descrizione')

        importo = dati.get('amount')
        if importo is None or (isinstance(importo, str) and not importo.strip()):
            importo = 0
        importo = ValidationUtils.validate_amount(importo)

        data_pagamento = ValidationUtils.validate_optional_date(dati.get('paymentDate'), 'data di pagamento')
        pagatore = dati.get('payer') or None
        if pagatore is not None:
            ValidationUtils.validate_choice(pagatore, PAGATORI, 'responsabile')

        # data di pagamento e responsabile hanno senso solo per le uscite
        if tipo == ENTRADA:
            data_pagamento = None
            pagatore = None

        stato = stato_iniziale(tipo, data, data_pagamento, dati.get('status') or stato_corrente, oggi)

        return {
            'date': data,
            'description': SecurityUtils.sanitize_string(descrizione, LUNGHEZZA_DESCRIZIONE),
            'entity': SecurityUtils.sanitize_string(dati.get('entity'), 200),
            'amount': importo,
            'status': stato,
            'type': tipo,
            'category': SecurityUtils.sanitize_string(dati.get('category'), 100) or self.categoria_default,
            'paymentDate': data_pagamento,
            'payer': pagatore,
        }

    @staticmethod
    def _colonne(bozza):
        """Dict del confine di persistenza -> kwargs del modello"""
        payload = {k: v for k, v in bozza.items() if k not in _CAMPI_NON_PERSISTITI}
        return {
            'date': payload['date'],
            'description': payload['description'],
            'entity': payload.get('entity') or '',
            'amount': payload['amount'],
            'status': payload['status'],
            'type': payload['type'],
            'category': payload.get('category'),
            'payment_date': payload.get('paymentDate') or None,
            'payer': payload.get('payer') or None,
        }

    # === Scrittura ===

    def create_transazione(self, bozza, oggi=None):
        """Crea una nuova transazione"""
        oggi = oggi or oggi_app()
        try:
            dati = self.prepara_bozza(bozza, oggi)
        except ValueError as e:
            return False, str(e), None

        transazione = Transazioni(**self._colonne(dati))
        success, message = self.save(transazione)
        if not success:
            return False, message, None
        return True, message, annota_rate([transazione.to_dict()])[0]

    def create_transazioni(self, bozze, oggi=None):
        """Inserimento in blocco: tutte le righe vengono salvate oppure nessuna.

        La validazione avviene su tutto il blocco prima di qualsiasi scrittura;
        in caso di errore del database l'intera transazione viene annullata e le
        singole righe non vengono ritentate.
        """
        oggi = oggi or oggi_app()
        if not bozze:
            return False, "Nessuna transazione da salvare", None
        try:
            dati = [self.prepara_bozza(b, oggi) for b in bozze]
        except ValueError as e:
            return False, str(e), None

        oggetti = [Transazioni(**self._colonne(d)) for d in dati]
        success, message = self.save_all(oggetti)
        if not success:
            return False, message, None
        return True, f"{len(oggetti)} transazioni create", annota_rate([o.to_dict() for o in oggetti])

    def create_rateizzata(self, dati, numero, oggi=None, policy=POLICY_CLAMP, massimo=MAX_RATE):
        """Divide una conta a pagar in `numero` rate mensili e le salva in blocco"""
        oggi = oggi or oggi_app()
        try:
            ValidationUtils.validate_required_field(dati.get('description'), 'descrizione')
            campi = dict(dati)
            campi.setdefault('type', SAIDA)
            bozze = genera_rate(
                dati.get('amount'),
                numero,
                dati.get('date'),
                campi=campi,
                stato_prima=dati.get('status'),
                policy=policy,
                massimo=massimo,
            )
        except ValueError as e:
            return False, str(e), None
        return self.create_transazioni(bozze, oggi)

    def update_transazione(self, record, oggi=None):
        """Aggiorna una transazione esistente (il tipo non può cambiare)"""
        oggi = oggi or oggi_app()
        transazione = self.get_by_id(record.get('id'))
        if not transazione:
            return False, "Transazione non trovata", None

        dati = dict(record)
        dati.setdefault('type', transazione.type)
        if dati['type'] != transazione.type:
            return False, "Il tipo di una transazione non può essere modificato", None
        try:
            pulito = self.prepara_bozza(dati, oggi, stato_corrente=transazione.status)
        except ValueError as e:
            return False, str(e), None

        if not dati.get('status'):
            pulito['status'] = self._stato_dopo_modifica(transazione, pulito, oggi)

        success, message = self.update(transazione, **self._colonne(pulito))
        if not success:
            return False, message, None
        return True, message, annota_rate([transazione.to_dict()])[0]

    @staticmethod
    def _stato_dopo_modifica(transazione, pulito, oggi):
        """Stato di una modifica completa senza stato esplicito nel form.

        Un cambio della data di pagamento o della scadenza ricalcola lo stato
        delle uscite; senza cambi di date resta quello salvato.
        """
        if pulito['paymentDate'] != (transazione.payment_date or None):
            return stato_dopo_pagamento(transazione.type, pulito['date'], pulito['paymentDate'],
                                        transazione.status, oggi)
        if pulito['date'] != transazione.date:
            return stato_dopo_scadenza(transazione.type, pulito['date'], pulito['paymentDate'],
                                       transazione.status, oggi)
        return transazione.status

    def aggiorna_stato(self, transazione_id, stato):
        """Cambio rapido dello stato dal menu a tendina"""
        transazione = self.get_by_id(transazione_id)
        if not transazione:
            return False, "Transazione non trovata", None
        try:
            valida_stato(transazione.type, stato)
        except ValueError as e:
            return False, str(e), None
        success, message = self.update(transazione, status=stato)
        return success, message, (transazione.to_dict() if success else None)

    def aggiorna_data_pagamento(self, transazione_id, nuova_data, oggi=None):
        """Cambio rapido della data di pagamento: lo stato viene ricalcolato"""
        oggi = oggi or oggi_app()
        transazione = self.get_by_id(transazione_id)
        if not transazione:
            return False, "Transazione non trovata", None
        try:
            data_pagamento = ValidationUtils.validate_optional_date(nuova_data, 'data di pagamento')
        except ValueError as e:
            return False, str(e), None
        stato = stato_dopo_pagamento(transazione.type, transazione.date, data_pagamento,
                                     transazione.status, oggi)
        success, message = self.update(transazione, payment_date=data_pagamento, status=stato)
        return success, message, (transazione.to_dict() if success else None)

    def aggiorna_scadenza(self, transazione_id, nuova_data, oggi=None):
        """Cambio rapido della data di scadenza: lo stato delle uscite viene ricalcolato"""
        oggi = oggi or oggi_app()
        transazione = self.get_by_id(transazione_id)
        if not transazione:
            return False, "Transazione non trovata", None
        try:
            data = ValidationUtils.validate_date(nuova_data, 'data')
        except ValueError as e:
            return False, str(e), None
        stato = stato_dopo_scadenza(transazione.type, data, transazione.payment_date,
                                    transazione.status, oggi)
        success, message = self.update(transazione, date=data, status=stato)
        return success, message, (transazione.to_dict() if success else None)

    def delete_transazione(self, transazione_id):
        """Elimina una transazione"""
        transazione = self.get_by_id(transazione_id)
        if not transazione:
            return False, "Transazione non trovata"
        return self.delete(transazione)

    # === Riconciliazione ===

    def aggiorna_scadute(self, oggi=None, righe=None):
        """Porta ad ATRASADO tutte le uscite PENDENTE con scadenza passata.

        Un solo passaggio e un solo commit: restituisce (success, message, numero).
        `righe` evita una seconda lettura quando il chiamante le ha già caricate.
        """
        oggi = oggi or oggi_app()
        if righe is None:
            success, righe = self.carica_transazioni()
            if not success:
                return False, righe, 0

        ids = [r['id'] for r in seleziona_scadute(righe, oggi)]
        if not ids:
            return True, "Nessuna transazione scaduta", 0

        try:
            aggiornate = Transazioni.query.filter(
                Transazioni.id.in_(ids),
                Transazioni.status == PENDENTE,
            ).update({Transazioni.status: ATRASADO}, synchronize_session=False)
            self.db.session.commit()
        except Exception as e:
            self.db.session.rollback()
            logger.warning('Errore nell\'aggiornamento delle transazioni scadute: %s', e)
            return False, str(e), 0

        logger.info('%d transazioni segnate come ATRASADO (oggi=%s)', aggiornate, oggi)
        return True, f"{aggiornate} transazioni segnate come ATRASADO", aggiornate

    def carica_aggiornate(self, oggi=None):
        """Caricamento dei dati: le uscite scadute diventano ATRASADO prima di essere restituite.

        Se la riconciliazione aggiorna qualcosa le righe vengono rilette una
        volta; un errore della riconciliazione non blocca la lettura.
        """
        success, righe = self.carica_transazioni()
        if not success:
            return False, righe

        success, message, numero = self.aggiorna_scadute(oggi, righe)
        if not success:
            logger.warning('Riconciliazione delle scadute non riuscita: %s', message)
            return True, righe
        if numero:
            return self.carica_transazioni()
        return True, righe
