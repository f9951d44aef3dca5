"""Modello per gli utenti del sistema"""
from app import db


class Utenti(db.Model):
    """Utente con ruolo ADMIN o VIEWER"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=False, unique=True, index=True)
    password_hash = db.Column('password', db.String(255), nullable=False)
    role = db.Column(db.String(10), nullable=False, default='VIEWER')
    status = db.Column(db.String(10), nullable=False, default='ATIVO')
    photo_url = db.Column('photoUrl', db.Text, nullable=True)
    last_access = db.Column('lastAccess', db.String(40), nullable=True)

    def to_dict(self):
        """Il campo password non esce mai dal livello dei servizi."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'status': self.status,
            'photoUrl': self.photo_url,
            'lastAccess': self.last_access,
        }

    def __repr__(self):
        return f'<Utenti {self.email} ({self.role})>'
