"""Applicazione Flask per il pannello finanziario Brastech"""

from flask import Flask, request
from flask_sqlalchemy import SQLAlchemy
import logging
import os
from app.config import config

# Istanze globali
db = SQLAlchemy()

# Rotte accessibili senza sessione
ROTTE_PUBBLICHE = ('/login', '/health')


def create_app(config_name='default'):
    """Factory pattern per creare l'applicazione Flask"""
    app = Flask(__name__)

    app.config.from_object(config[config_name])
    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    # Inizializza le estensioni
    db.init_app(app)

    # Jinja filter: format_currency (usato anche dagli export)
    from app.utils.formatting import format_currency
    app.jinja_env.filters['format_currency'] = format_currency

    # Importa e registra i blueprint
    from app.views.main import main_bp
    from app.views.transazioni import transazioni_bp, dashboard_bp
    from app.views.clienti import clienti_bp
    from app.views.utenti import utenti_bp
    from app.views.sistema import sistema_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(transazioni_bp, url_prefix='/transazioni')
    app.register_blueprint(dashboard_bp, url_prefix='/dashboard')
    app.register_blueprint(clienti_bp, url_prefix='/clienti')
    app.register_blueprint(utenti_bp, url_prefix='/utenti')
    app.register_blueprint(sistema_bp, url_prefix='/sistema')

    # Protezione globale: tutte le rotte tranne login e health richiedono una sessione
    from app.views import sessione_corrente, errore

    @app.before_request
    def richiedi_autenticazione():
        path = request.path or ''
        if path in ROTTE_PUBBLICHE or path.startswith('/static'):
            return None
        if sessione_corrente() is None:
            return errore('Autenticação necessária', 401)
        return None

    # Crea le tabelle al primo avvio (nessuna migrazione)
    from app import models  # noqa: F401
    db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
    if db_uri.startswith('sqlite:///'):
        os.makedirs(os.path.dirname(db_uri[len('sqlite:///'):]) or '.', exist_ok=True)
    with app.app_context():
        db.create_all()

    app.logger.debug('App creata con configurazione %s', config_name)
    return app
