"""Blueprint per backup e verifica della connessione"""
from datetime import datetime
from flask import Blueprint, jsonify, current_app, Response
from app.services.sistema.backup_service import BackupService
from app.views import to_json, richiede_scrittura

sistema_bp = Blueprint('sistema', __name__)

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def _nome_file(estensione):
    return f"brastech_backup_{datetime.now().strftime('%Y-%m-%d')}.{estensione}"


@sistema_bp.route('/backup.json')
@richiede_scrittura
def backup_json():
    risposta = jsonify(to_json(BackupService().esporta_json()))
    risposta.headers['Content-Disposition'] = f'attachment; filename={_nome_file("json")}'
    return risposta


@sistema_bp.route('/backup.xlsx')
@richiede_scrittura
def backup_xlsx():
    try:
        contenuto = BackupService().esporta_xlsx()
    except Exception as e:
        current_app.logger.exception('Errore durante il backup xlsx: %s', e)
        return jsonify({'ok': False, 'error': 'Erro ao gerar backup.'}), 500
    return Response(
        contenuto,
        mimetype=XLSX_MIMETYPE,
        headers={'Content-Disposition': f'attachment; filename={_nome_file("xlsx")}'},
    )


@sistema_bp.route('/conexao')
def conexao():
    success, message = BackupService().verifica_connessione()
    return jsonify({'ok': success, 'message': message}), (200 if success else 503)
