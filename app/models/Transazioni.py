"""Modello per le transazioni (contas a pagar / a receber)"""
from app import db
from datetime import datetime


class Transazioni(db.Model):
    """Modello per le transazioni finanziarie.

    Le date sono salvate come stringhe `YYYY-MM-DD` (come nello schema remoto
    originale): non passano mai da un calendario con fuso orario.
    """
    __tablename__ = 'transactions'

    id = db.Column(db.Integer, primary_key=True)
    # Vencimento per SAIDA, data di entrata per ENTRADA
    date = db.Column(db.String(10), nullable=False, index=True)
    description = db.Column(db.String(200), nullable=False, default='')
    entity = db.Column(db.String(200), nullable=False, default='')
    amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False)
    type = db.Column(db.String(10), nullable=False, index=True)  # 'ENTRADA' o 'SAIDA'
    category = db.Column(db.String(100), nullable=True, default='Geral')
    payment_date = db.Column('paymentDate', db.String(10), nullable=True)  # solo SAIDA
    payer = db.Column(db.String(50), nullable=True)  # solo SAIDA
    data_creazione = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self):
        """Riga nel formato del confine di persistenza (chiavi camelCase)."""
        return {
            'id': self.id,
            'date': self.date,
            'description': self.description,
            'entity': self.entity,
            'amount': float(self.amount) if self.amount is not None else 0.0,
            'status': self.status,
            'type': self.type,
            'category': self.category,
            'paymentDate': self.payment_date,
            'payer': self.payer,
        }

    def __repr__(self):
        return f'<Transazioni {self.description}: {self.amount} ({self.type} {self.status})>'
