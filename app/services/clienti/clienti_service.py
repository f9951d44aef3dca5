"""
Servizio per l'anagrafica clienti
"""
import logging
from app.models.Clienti import Clienti
from app.defaults import STATI_CLIENTE
from app.services import BaseService
from app.services.transazioni.stato_service import oggi_app
from app.utils import ValidationUtils, SecurityUtils

logger = logging.getLogger(__name__)

__all__ = ['ClientiService']


class ClientiService(BaseService):
    """Servizio per la gestione dei clienti"""

    def carica_clienti(self):
        try:
            clienti = Clienti.query.order_by(Clienti.name.asc()).all()
            return True, [c.to_dict() for c in clienti]
        except Exception as e:
            logger.warning('Errore nel caricamento dei clienti: %s', e)
            return False, str(e)

    def list_clienti(self):
        """Tutti i clienti in ordine alfabetico; lista vuota in caso di errore"""
        success, risultato = self.carica_clienti()
        return risultato if success else []

    def get_by_id(self, cliente_id):
        try:
            return self.db.session.get(Clienti, int(cliente_id))
        except (TypeError, ValueError):
            return None

    def prepara_cliente(self, dati, oggi):
        """Valida i dati del form cliente (solleva ValueError)"""
        nome = ValidationUtils.validate_required_field(dati.get('name'), 'nome')
        data_registrazione = ValidationUtils.validate_optional_date(
            dati.get('registrationDate'), 'data di registrazione') or oggi
        stato = ValidationUtils.validate_choice(dati.get('status') or 'ATIVO', STATI_CLIENTE, 'stato')

        # giorno del mese in cui scade la mensilità (1-31), opzionale
        giorno = dati.get('dueDate')
        giorno = '' if giorno is None else str(giorno).strip()
        if giorno:
            if not giorno.isdigit() or not 1 <= int(giorno) <= 31:
                raise ValueError("Giorno di scadenza non valido (1-31)")

        valore = dati.get('planValue')
        if valore is None or (isinstance(valore, str) and not valore.strip()):
            valore = 0

        return {
            'registration_date': data_registrazione,
            'name': SecurityUtils.sanitize_string(nome, 200),
            'phone': SecurityUtils.sanitize_string(dati.get('phone'), 50),
            'cpf': SecurityUtils.sanitize_string(dati.get('cpf'), 20),
            'address': SecurityUtils.sanitize_string(dati.get('address'), 300),
            'status': stato,
            'observation': SecurityUtils.sanitize_string(dati.get('observation')),
            'due_date': giorno,
            'consultant': SecurityUtils.sanitize_string(dati.get('consultant'), 100),
            'plan_value': ValidationUtils.validate_amount(valore),
        }

    def create_cliente(self, dati, oggi=None):
        oggi = oggi or oggi_app()
        try:
            campi = self.prepara_cliente(dati, oggi)
        except ValueError as e:
            return False, str(e), None

        cliente = Clienti(**campi)
        success, message = self.save(cliente)
        return success, message, (cliente.to_dict() if success else None)

    def update_cliente(self, dati, oggi=None):
        oggi = oggi or oggi_app()
        cliente = self.get_by_id(dati.get('id'))
        if not cliente:
            return False, "Cliente non trovato", None
        try:
            campi = self.prepara_cliente({'registrationDate': cliente.registration_date, **dati}, oggi)
        except ValueError as e:
            return False, str(e), None

        success, message = self.update(cliente, **campi)
        return success, message, (cliente.to_dict() if success else None)

    def aggiorna_stato(self, cliente_id, stato):
        cliente = self.get_by_id(cliente_id)
        if not cliente:
            return False, "Cliente non trovato", None
        try:
            ValidationUtils.validate_choice(stato, STATI_CLIENTE, 'stato')
        except ValueError as e:
            return False, str(e), None
        success, message = self.update(cliente, status=stato)
        return success, message, (cliente.to_dict() if success else None)

    def delete_cliente(self, cliente_id):
        cliente = self.get_by_id(cliente_id)
        if not cliente:
            return False, "Cliente non trovato"
        return self.delete(cliente)
