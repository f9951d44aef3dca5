"""
Servizio per gli utenti del sistema e per il login.

Le password vengono salvate come hash werkzeug; l'hash non esce mai da
questo modulo (`Utenti.to_dict` non lo include).
"""
import logging
from datetime import datetime
from dateutil import tz
from werkzeug.security import generate_password_hash, check_password_hash
from app.models.Utenti import Utenti
from app.defaults import RUOLI_UTENTE, STATI_UTENTE, PASSWORD_DEFAULT
from app.services import BaseService
from app.utils import ValidationUtils, SecurityUtils

logger = logging.getLogger(__name__)

__all__ = ['UtentiService', 'formato_ultimo_accesso']

ADMIN_EMAIL_DEFAULT = 'admin@brastech.com'


def formato_ultimo_accesso(adesso=None, tz_name=None):
    """Data e ora dell'ultimo accesso nel fuso locale: 'dd/mm/YYYY HH:MM:SS'"""
    zona = tz.gettz(tz_name) if tz_name else None
    if zona is None:
        zona = tz.tzlocal()
    adesso = adesso.astimezone(zona) if adesso else datetime.now(zona)
    return adesso.strftime('%d/%m/%Y %H:%M:%S')


class UtentiService(BaseService):
    """Servizio per la gestione degli utenti"""

    def __init__(self, tz_name=None):
        super().__init__()
        self.tz_name = tz_name

    def carica_utenti(self):
        try:
            utenti = Utenti.query.order_by(Utenti.name.asc()).all()
            return True, [u.to_dict() for u in utenti]
        except Exception as e:
            logger.warning('Errore nel caricamento degli utenti: %s', e)
            return False, str(e)

    def list_utenti(self):
        success, risultato = self.carica_utenti()
        return risultato if success else []

    def get_by_id(self, utente_id):
        try:
            return self.db.session.get(Utenti, int(utente_id))
        except (TypeError, ValueError):
            return None

    def get_by_email(self, email):
        if not email:
            return None
        return Utenti.query.filter_by(email=str(email).strip().lower()).first()

    def _prepara_utente(self, dati, utente_id=None):
        nome = ValidationUtils.validate_required_field(dati.get('name'), 'nome')
        email = ValidationUtils.validate_required_field(dati.get('email'), 'email').lower()
        if '@' not in email:
            raise ValueError("Email non valida")
        esistente = self.get_by_email(email)
        if esistente and esistente.id != utente_id:
            raise ValueError(f"Email già registrata: {email}")

        return {
            'name': SecurityUtils.sanitize_string(nome, 200),
            'email': email,
            'role': ValidationUtils.validate_choice(dati.get('role') or 'VIEWER', RUOLI_UTENTE, 'ruolo'),
            'status': ValidationUtils.validate_choice(dati.get('status') or 'ATIVO', STATI_UTENTE, 'stato'),
            'photo_url': SecurityUtils.sanitize_string(dati.get('photoUrl')) or None,
        }

    def create_utente(self, dati):
        """Crea un utente; senza password viene usata quella predefinita"""
        try:
            campi = self._prepara_utente(dati)
        except ValueError as e:
            return False, str(e), None

        password = (dati.get('password') or '').strip() or PASSWORD_DEFAULT
        utente = Utenti(password_hash=generate_password_hash(password), **campi)
        success, message = self.save(utente)
        return success, message, (utente.to_dict() if success else None)

    def update_utente(self, dati):
        """Aggiorna un utente; una password vuota lascia invariata quella attuale"""
        utente = self.get_by_id(dati.get('id'))
        if not utente:
            return False, "Utente non trovato", None
        try:
            campi = self._prepara_utente(dati, utente_id=utente.id)
        except ValueError as e:
            return False, str(e), None

        password = (dati.get('password') or '').strip()
        if password:
            campi['password_hash'] = generate_password_hash(password)
        success, message = self.update(utente, **campi)
        return success, message, (utente.to_dict() if success else None)

    def delete_utente(self, utente_id):
        utente = self.get_by_id(utente_id)
        if not utente:
            return False, "Utente non trovato"
        return self.delete(utente)

    def login(self, email, password, adesso=None):
        """Verifica le credenziali e registra l'ultimo accesso.

        Restituisce il dict dell'utente, None se le credenziali sono errate;
        solleva PermissionError se l'account è sospeso.
        """
        utente = self.get_by_email(email)
        if not utente or not check_password_hash(utente.password_hash, (password or '').strip()):
            logger.info('Login fallito per %s', email)
            return None
        if utente.status == 'SUSPENSO':
            raise PermissionError('Conta suspensa. Contate o administrador.')

        # un errore nel salvataggio dell'ultimo accesso non blocca il login
        success, message = self.update(utente, last_access=formato_ultimo_accesso(adesso, self.tz_name))
        if not success:
            logger.warning('Impossibile aggiornare lastAccess per %s: %s', utente.email, message)
        return utente.to_dict()

    def assicura_admin(self, email=ADMIN_EMAIL_DEFAULT, nome='Administrador'):
        """Crea un amministratore con la password predefinita se non esiste nessun utente"""
        if Utenti.query.count() > 0:
            return False, "Utenti già presenti", None
        logger.info('Nessun utente presente: creo %s', email)
        return self.create_utente({'name': nome, 'email': email, 'role': 'ADMIN'})
