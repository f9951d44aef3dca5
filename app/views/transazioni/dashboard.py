"""Blueprint JSON per la dashboard: serie annuale, totali e dettaglio mensile"""
from flask import Blueprint, request, jsonify, current_app
from app.services.transazioni.transazioni_service import TransazioneService
from app.services.transazioni.riepilogo_service import (
    serie_annuale, totali_annuali, dettaglio_mensile, anni_disponibili, predicato_stato,
)
from app.services.transazioni.stato_service import oggi_app
from app.views import errore, to_json

dashboard_bp = Blueprint('dashboard', __name__)


def _flag(valore, default):
    if valore is None:
        return default
    return valore.strip().lower() in ('1', 'true', 'yes', 'on', 'sim')


@dashboard_bp.route('/')
def view():
    oggi = oggi_app()
    try:
        anno = int(request.args.get('ano', oggi[:4]))
        mese = int(request.args.get('mes', oggi[5:7]))
    except ValueError:
        return errore('Parametri ano/mes non validi', 400)
    if not 1 <= mese <= 12:
        return errore('Il mese deve essere compreso tra 1 e 12', 400)

    tutti = _flag(request.args.get('tutti_stati'), current_app.config.get('INCLUDE_ALL_STATUSES', False))
    predicato = predicato_stato(tutti)

    # le scadute vengono riconciliate prima dei riepiloghi; una lettura fallita mostra una dashboard vuota
    success, righe = TransazioneService().carica_aggiornate(oggi)
    if not success:
        righe = []
    categoria_default = current_app.config.get('CATEGORIA_DEFAULT', 'Geral')

    return jsonify(to_json({
        'ok': True,
        'year': anno,
        'month': mese,
        'includeAllStatuses': tutti,
        'series': serie_annuale(righe, anno, predicato),
        'totals': totali_annuali(righe, anno, predicato),
        'monthly': dettaglio_mensile(righe, anno, mese, predicato, categoria_default),
        'years': anni_disponibili(righe),
    }))
