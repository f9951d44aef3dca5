"""Blueprint JSON per l'anagrafica clienti"""
from flask import Blueprint, request, jsonify, current_app
from app.services.clienti.clienti_service import ClientiService
from app.services.transazioni.stato_service import oggi_app
from app.views import risposta, errore, richiede_scrittura

clienti_bp = Blueprint('clienti', __name__)
service = ClientiService()


@clienti_bp.route('/')
def lista():
    success, clienti = service.carica_clienti()
    if not success:
        current_app.logger.warning('Lista clienti non disponibile: %s', clienti)
        return errore(clienti, 500)
    return jsonify({'ok': True, 'clients': clienti})


@clienti_bp.route('/', methods=['POST'])
@richiede_scrittura
def crea():
    success, message, cliente = service.create_cliente(request.get_json(silent=True) or {}, oggi_app())
    return risposta(success, message, cliente, status_ok=201)


@clienti_bp.route('/<int:cliente_id>', methods=['PUT'])
@richiede_scrittura
def modifica(cliente_id):
    dati = dict(request.get_json(silent=True) or {}, id=cliente_id)
    success, message, cliente = service.update_cliente(dati, oggi_app())
    if not success and message == "Cliente non trovato":
        return errore(message, 404)
    return risposta(success, message, cliente)


@clienti_bp.route('/<int:cliente_id>/status', methods=['POST'])
@richiede_scrittura
def cambia_stato(cliente_id):
    stato = (request.get_json(silent=True) or {}).get('status')
    success, message, cliente = service.aggiorna_stato(cliente_id, stato)
    if not success and message == "Cliente non trovato":
        return errore(message, 404)
    return risposta(success, message, cliente)


@clienti_bp.route('/<int:cliente_id>', methods=['DELETE'])
@richiede_scrittura
def elimina(cliente_id):
    success, message = service.delete_cliente(cliente_id)
    if not success and message == "Cliente non trovato":
        return errore(message, 404)
    return risposta(success, message, status_errore=500)
