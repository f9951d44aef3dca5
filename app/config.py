"""Configurazione per il pannello finanziario Brastech"""
import os
from datetime import timedelta


def _env_bool(name, default=False):
    valore = os.environ.get(name)
    if valore is None:
        return default
    return valore.strip().lower() in ('1', 'true', 'yes', 'on', 'sim')


class Config:
    """Configurazione principale dell'applicazione"""

    # Database
    # Path assoluto verso la cartella `db/` nella root del repository.
    BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        f'sqlite:///{os.path.join(BASE_DIR, "db", "brastech.db")}'
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY', 'brastech-financeiro-secret-key')
    TESTING = False

    # Sessione
    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Server
    HOST = '0.0.0.0'
    PORT = int(os.environ.get('PORT', 5001))

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Fuso orario usato per calcolare "oggi" (giorno locale, mai UTC)
    APP_TIMEZONE = os.environ.get('APP_TIMEZONE', 'America/Sao_Paulo')

    # Riepiloghi: False = contano solo le transazioni PAGO
    INCLUDE_ALL_STATUSES = _env_bool('INCLUDE_ALL_STATUSES', False)

    # Rate: 'clamp' = ultimo giorno valido del mese, 'rollover' = overflow nel mese successivo
    MONTH_OVERFLOW_POLICY = os.environ.get('MONTH_OVERFLOW_POLICY', 'clamp')
    MAX_INSTALLMENTS = int(os.environ.get('MAX_INSTALLMENTS', 36))

    CATEGORIA_DEFAULT = 'Geral'

    FORMATO_VALUTA = "R$ {:.2f}"


class TestingConfig(Config):
    """Configurazione per i test (database in memoria)"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SECRET_KEY = 'testing'
    APP_TIMEZONE = 'America/Sao_Paulo'
    INCLUDE_ALL_STATUSES = False
    MONTH_OVERFLOW_POLICY = 'clamp'
    MAX_INSTALLMENTS = 36
    LOG_LEVEL = 'WARNING'


config = {
    'default': Config,
    'testing': TestingConfig,
}
