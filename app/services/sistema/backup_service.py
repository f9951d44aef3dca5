"""
Servizio di backup: esportazione di tutte le collezioni (JSON e xlsx)
e verifica della connessione al database.
"""
import io
import logging
from datetime import datetime
import openpyxl
from sqlalchemy import text
from app.services import BaseService
from app.services.transazioni.transazioni_service import TransazioneService
from app.services.clienti.clienti_service import ClientiService
from app.services.utenti.utenti_service import UtentiService
from app.services.transazioni.vista_service import carica_tutto

logger = logging.getLogger(__name__)

__all__ = ['BackupService']

SORGENTE = 'brastech-financeiro'

_COLONNE = {
    'transactions': ['id', 'date', 'description', 'entity', 'amount', 'status', 'type',
                     'category', 'paymentDate', 'payer'],
    'clients': ['id', 'registrationDate', 'name', 'phone', 'cpf', 'address', 'status',
                'observation', 'dueDate', 'consultant', 'planValue'],
    'users': ['id', 'name', 'email', 'role', 'status', 'photoUrl', 'lastAccess'],
}


class BackupService(BaseService):

    def __init__(self, transazioni_service=None, clienti_service=None, utenti_service=None):
        super().__init__()
        self.transazioni_service = transazioni_service or TransazioneService()
        self.clienti_service = clienti_service or ClientiService()
        self.utenti_service = utenti_service or UtentiService()

    def raccogli(self):
        return carica_tutto(self.transazioni_service, self.clienti_service, self.utenti_service)

    def esporta_json(self, adesso=None):
        """Snapshot di tutte le collezioni (le password non sono incluse)"""
        dati = self.raccogli()
        dati['exportDate'] = (adesso or datetime.now()).isoformat(timespec='seconds')
        dati['source'] = SORGENTE
        return dati

    def esporta_xlsx(self):
        """Cartella di lavoro con un foglio per collezione, restituita come bytes"""
        dati = self.raccogli()
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        for nome, colonne in _COLONNE.items():
            ws = wb.create_sheet(title=nome)
            for i, h in enumerate(colonne, 1):
                ws.cell(row=1, column=i, value=h)
            for r_idx, riga in enumerate(dati[nome], 2):
                for c_idx, colonna in enumerate(colonne, 1):
                    ws.cell(row=r_idx, column=c_idx, value=riga.get(colonna))

        buffer = io.BytesIO()
        wb.save(buffer)
        logger.info('Backup xlsx generato: %s',
                    ', '.join(f'{k}={len(dati[k])}' for k in _COLONNE))
        return buffer.getvalue()

    def verifica_connessione(self):
        """Esegue una query banale sul database: (True, messaggio) oppure (False, errore)"""
        try:
            self.db.session.execute(text('SELECT 1'))
            return True, "Conexão com o banco de dados estabelecida com sucesso"
        except Exception as e:
            self.db.session.rollback()
            logger.warning('Verifica connessione fallita: %s', e)
            return False, f"Falha na conexão: {e}"
