"""Helper condivisi dai blueprint JSON: serializzazione, risposte e controllo accessi."""
from decimal import Decimal
from functools import wraps
from flask import jsonify, session
from app.services.utenti.sessione import SessioneUtente


def to_json(valore):
    """Converte ricorsivamente i Decimal in float per jsonify"""
    if isinstance(valore, Decimal):
        return float(valore)
    if isinstance(valore, dict):
        return {k: to_json(v) for k, v in valore.items()}
    if isinstance(valore, (list, tuple)):
        return [to_json(v) for v in valore]
    return valore


def risposta(success, message, dati=None, status_errore=400, status_ok=200):
    """Risposta JSON uniforme per le scritture dei servizi"""
    if success:
        return jsonify({'ok': True, 'message': message, 'data': to_json(dati)}), status_ok
    return jsonify({'ok': False, 'error': message}), status_errore


def errore(message, status):
    return jsonify({'ok': False, 'error': message}), status


def sessione_corrente():
    """Sessione dell'utente collegato, ricostruita dal cookie firmato"""
    return SessioneUtente.da_sessione(session)


def richiede_scrittura(view):
    """Le scritture sono riservate agli ADMIN: 401 senza sessione, 403 per i VIEWER"""
    @wraps(view)
    def wrapper(*args, **kwargs):
        utente = sessione_corrente()
        if utente is None:
            return errore('Autenticação necessária', 401)
        if utente.read_only:
            return errore('Acesso somente leitura', 403)
        return view(*args, **kwargs)
    return wrapper
