"""Blueprint JSON per contas a pagar (SAIDA) e contas a receber (ENTRADA)"""
from flask import Blueprint, request, jsonify, current_app
from app.defaults import TIPI_TRANSAZIONE
from app.services.transazioni.transazioni_service import TransazioneService
from app.services.transazioni.riepilogo_service import raggruppa_per_data
from app.services.transazioni.stato_service import oggi_app
from app.views import risposta, errore, to_json, richiede_scrittura

transazioni_bp = Blueprint('transazioni', __name__)


def _service():
    return TransazioneService(current_app.config.get('CATEGORIA_DEFAULT', 'Geral'))


def _payload():
    return request.get_json(silent=True) or {}


@transazioni_bp.route('/')
def lista():
    """Transazioni di un tipo raggruppate per giorno, dalla più recente"""
    tipo = request.args.get('tipo')
    if tipo not in TIPI_TRANSAZIONE:
        return errore(f"Parametro tipo non valido: {tipo!r}", 400)

    # ogni caricamento riconcilia prima le uscite scadute
    success, righe = _service().carica_aggiornate(oggi_app())
    if not success:
        current_app.logger.warning('Lista transazioni non disponibile: %s', righe)
        return errore(righe, 500)
    return jsonify({'ok': True, 'tipo': tipo, 'gruppi': to_json(raggruppa_per_data(righe, tipo))})


@transazioni_bp.route('/', methods=['POST'])
@richiede_scrittura
def crea():
    success, message, record = _service().create_transazione(_payload(), oggi_app())
    return risposta(success, message, record, status_ok=201)


@transazioni_bp.route('/rateizzata', methods=['POST'])
@richiede_scrittura
def crea_rateizzata():
    """Conta a pagar divisa in N rate mensili, salvate tutte insieme"""
    dati = _payload()
    success, message, records = _service().create_rateizzata(
        dati,
        dati.get('installments'),
        oggi_app(),
        policy=current_app.config.get('MONTH_OVERFLOW_POLICY', 'clamp'),
        massimo=current_app.config.get('MAX_INSTALLMENTS', 36),
    )
    return risposta(success, message, records, status_ok=201)


@transazioni_bp.route('/<int:transazione_id>', methods=['PUT'])
@richiede_scrittura
def modifica(transazione_id):
    dati = dict(_payload(), id=transazione_id)
    success, message, record = _service().update_transazione(dati, oggi_app())
    if not success and record is None and message == "Transazione non trovata":
        return errore(message, 404)
    return risposta(success, message, record)


@transazioni_bp.route('/<int:transazione_id>/status', methods=['POST'])
@richiede_scrittura
def cambia_stato(transazione_id):
    success, message, record = _service().aggiorna_stato(transazione_id, _payload().get('status'))
    return risposta(success, message, record)


@transazioni_bp.route('/<int:transazione_id>/pagamento', methods=['POST'])
@richiede_scrittura
def cambia_pagamento(transazione_id):
    """Cambio rapido della data di pagamento (vuota = non pagata)"""
    success, message, record = _service().aggiorna_data_pagamento(
        transazione_id, _payload().get('paymentDate'), oggi_app())
    return risposta(success, message, record)


@transazioni_bp.route('/<int:transazione_id>/scadenza', methods=['POST'])
@richiede_scrittura
def cambia_scadenza(transazione_id):
    success, message, record = _service().aggiorna_scadenza(
        transazione_id, _payload().get('date'), oggi_app())
    return risposta(success, message, record)


@transazioni_bp.route('/<int:transazione_id>', methods=['DELETE'])
@richiede_scrittura
def elimina(transazione_id):
    success, message = _service().delete_transazione(transazione_id)
    if not success and message == "Transazione non trovata":
        return errore(message, 404)
    return risposta(success, message, status_errore=500)


@transazioni_bp.route('/scadute', methods=['POST'])
@richiede_scrittura
def aggiorna_scadute():
    """PENDENTE -> ATRASADO per le uscite scadute"""
    success, message, numero = _service().aggiorna_scadute(oggi_app())
    return risposta(success, message, {'updated': numero}, status_errore=500)
