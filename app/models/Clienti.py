"""Modello per l'anagrafica clienti"""
from app import db


class Clienti(db.Model):
    """Cliente con attributi di fatturazione"""
    __tablename__ = 'clients'

    id = db.Column(db.Integer, primary_key=True)
    registration_date = db.Column('registrationDate', db.String(10), nullable=True)
    name = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(50), nullable=True, default='')
    cpf = db.Column(db.String(20), nullable=True, default='')
    address = db.Column(db.String(300), nullable=True, default='')
    status = db.Column(db.String(20), nullable=False, default='ATIVO')  # 'ATIVO', 'INATIVO', 'SUSPENSO'
    observation = db.Column(db.Text, nullable=True, default='')
    due_date = db.Column('dueDate', db.String(10), nullable=True, default='')  # giorno di scadenza
    consultant = db.Column(db.String(100), nullable=True, default='')
    plan_value = db.Column('planValue', db.Numeric(12, 2), nullable=False, default=0)

    def to_dict(self):
        return {
            'id': self.id,
            'registrationDate': self.registration_date,
            'name': self.name,
            'phone': self.phone,
            'cpf': self.cpf,
            'address': self.address,
            'status': self.status,
            'observation': self.observation,
            'dueDate': self.due_date,
            'consultant': self.consultant,
            'planValue': float(self.plan_value) if self.plan_value is not None else 0.0,
        }

    def __repr__(self):
        return f'<Clienti {self.name} ({self.status})>'
