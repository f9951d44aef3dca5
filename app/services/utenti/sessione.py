"""Sessione dell'utente collegato.

Oggetto esplicito costruito dal cookie firmato di Flask ai bordi (views) e
passato ai chiamanti; il resto dell'applicazione non legge stato globale.
"""

__all__ = ['SessioneUtente']


class SessioneUtente:
    CHIAVE = 'utente'

    def __init__(self, id, name, email, role):
        self.id = id
        self.name = name
        self.email = email
        self.role = role

    @property
    def is_admin(self):
        return self.role == 'ADMIN'

    @property
    def read_only(self):
        return not self.is_admin

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'readOnly': self.read_only,
        }

    @classmethod
    def da_utente(cls, utente):
        return cls(utente['id'], utente['name'], utente['email'], utente['role'])

    @classmethod
    def da_sessione(cls, session):
        """Ricostruisce la sessione dal cookie; None se non c'è un utente collegato"""
        dati = session.get(cls.CHIAVE)
        if not dati:
            return None
        try:
            return cls(dati['id'], dati['name'], dati['email'], dati['role'])
        except (KeyError, TypeError):
            return None

    def salva(self, session):
        session[self.CHIAVE] = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
        }
        session.permanent = True

    @classmethod
    def termina(cls, session):
        session.pop(cls.CHIAVE, None)

    def __repr__(self):
        return f'<SessioneUtente {self.email} ({self.role})>'
