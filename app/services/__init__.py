"""
Servizio base per la gestione della business logic
"""
from app import db
from collections.abc import Mapping
from datetime import date
import calendar
import logging
import re

logger = logging.getLogger(__name__)

# Esporta le funzioni per l'import diretto
__all__ = ['BaseService', 'split_iso_date', 'normalizza_iso', 'iso_da_parti', 'leggi_campo']

# 'YYYY-MM-DD', eventualmente seguito da un orario ('T...' o ' ...') restituito dallo store
_ISO_RE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})(?:[T ].*)?$', re.ASCII)


class BaseService:
    """Classe base per i servizi con metodi comuni"""

    def __init__(self):
        self.db = db

    def save(self, obj):
        """Salva un oggetto nel database"""
        try:
            self.db.session.add(obj)
            self.db.session.commit()
            return True, "Operazione completata con successo"
        except Exception as e:
            self.db.session.rollback()
            logger.warning('save fallito per %r: %s', obj, e)
            return False, str(e)

    def save_all(self, objs):
        """Salva più oggetti in un'unica transazione: o tutti o nessuno"""
        try:
            self.db.session.add_all(objs)
            self.db.session.commit()
            return True, "Operazione completata con successo"
        except Exception as e:
            self.db.session.rollback()
            logger.warning('save_all fallito (%d oggetti): %s', len(objs), e)
            return False, str(e)

    def delete(self, obj):
        """Elimina un oggetto dal database"""
        try:
            self.db.session.delete(obj)
            self.db.session.commit()
            return True, "Eliminazione completata con successo"
        except Exception as e:
            self.db.session.rollback()
            logger.warning('delete fallito per %r: %s', obj, e)
            return False, str(e)

    def update(self, obj, **kwargs):
        """Aggiorna un oggetto con i parametri forniti"""
        try:
            for key, value in kwargs.items():
                if hasattr(obj, key):
                    setattr(obj, key, value)

            self.db.session.commit()
            return True, "Aggiornamento completato con successo"
        except Exception as e:
            self.db.session.rollback()
            logger.warning('update fallito per %r: %s', obj, e)
            return False, str(e)


def split_iso_date(valore):
    """Estrae (anno, mese, giorno) da una stringa `YYYY-MM-DD`.

    Lavora direttamente sulla stringa: nessun costruttore di date con fuso
    orario, quindi nessuno slittamento di un giorno vicino alla mezzanotte.
    Restituisce None per valori non interpretabili (mai un'eccezione).
    """
    if isinstance(valore, date):
        return valore.year, valore.month, valore.day
    if not isinstance(valore, str):
        return None
    match = _ISO_RE.match(valore.strip())
    if not match:
        return None
    anno, mese, giorno = (int(p) for p in match.groups())
    if anno < 1 or not 1 <= mese <= 12:
        return None
    if not 1 <= giorno <= calendar.monthrange(anno, mese)[1]:
        return None
    return anno, mese, giorno


def iso_da_parti(anno, mese, giorno):
    return f'{anno:04d}-{mese:02d}-{giorno:02d}'


def normalizza_iso(valore):
    """Forma canonica `YYYY-MM-DD` oppure None"""
    parti = split_iso_date(valore)
    if parti is None:
        return None
    return iso_da_parti(*parti)



def _snake_case(nome):
    return re.sub(r'(?<!^)(?=[A-Z])', '_', nome).lower()


def leggi_campo(record, nome, default=None):
    """Legge un campo da un dict (chiavi camelCase dello store) o da un oggetto ORM"""
    if isinstance(record, Mapping):
        return record.get(nome, default)
    if hasattr(record, nome):
        return getattr(record, nome)
    return getattr(record, _snake_case(nome), default)
