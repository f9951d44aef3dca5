"""Blueprint principale: login, logout, sessione corrente e health check"""
from flask import Blueprint, request, jsonify, session, current_app
from app.services.utenti.utenti_service import UtentiService
from app.services.utenti.sessione import SessioneUtente
from app.views import errore, sessione_corrente

main_bp = Blueprint('main', __name__)


@main_bp.route('/login', methods=['POST'])
def login():
    dati = request.get_json(silent=True) or request.form
    email = (dati.get('email') or '').strip()
    password = dati.get('password') or ''
    if not email or not password:
        return errore('Informe e-mail e senha', 400)

    service = UtentiService(current_app.config.get('APP_TIMEZONE'))
    try:
        utente = service.login(email, password)
    except PermissionError as e:
        current_app.logger.info('Accesso negato a %s: account sospeso', email)
        return errore(str(e), 403)

    if utente is None:
        return errore('E-mail ou senha inválidos', 401)

    sessione = SessioneUtente.da_utente(utente)
    sessione.salva(session)
    current_app.logger.info('Login di %s (%s)', sessione.email, sessione.role)
    return jsonify({'ok': True, 'user': utente, 'session': sessione.to_dict()})


@main_bp.route('/logout', methods=['POST'])
def logout():
    SessioneUtente.termina(session)
    return jsonify({'ok': True})


@main_bp.route('/me')
def me():
    return jsonify({'ok': True, 'session': sessione_corrente().to_dict()})


@main_bp.route('/health')
def health():
    return jsonify({'status': 'ok'})
