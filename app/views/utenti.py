"""Blueprint JSON per la gestione degli utenti"""
from flask import Blueprint, request, jsonify, current_app
from app.services.utenti.utenti_service import UtentiService
from app.views import risposta, errore, richiede_scrittura

utenti_bp = Blueprint('utenti', __name__)
service = UtentiService()


@utenti_bp.route('/')
def lista():
    success, utenti = service.carica_utenti()
    if not success:
        current_app.logger.warning('Lista utenti non disponibile: %s', utenti)
        return errore(utenti, 500)
    return jsonify({'ok': True, 'users': utenti})


@utenti_bp.route('/', methods=['POST'])
@richiede_scrittura
def crea():
    success, message, utente = service.create_utente(request.get_json(silent=True) or {})
    return risposta(success, message, utente, status_ok=201)


@utenti_bp.route('/<int:utente_id>', methods=['PUT'])
@richiede_scrittura
def modifica(utente_id):
    dati = dict(request.get_json(silent=True) or {}, id=utente_id)
    success, message, utente = service.update_utente(dati)
    if not success and message == "Utente non trovato":
        return errore(message, 404)
    return risposta(success, message, utente)


@utenti_bp.route('/<int:utente_id>', methods=['DELETE'])
@richiede_scrittura
def elimina(utente_id):
    success, message = service.delete_utente(utente_id)
    if not success and message == "Utente non trovato":
        return errore(message, 404)
    return risposta(success, message, status_errore=500)
