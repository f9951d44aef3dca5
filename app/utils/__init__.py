"""
Utilità comuni per l'applicazione
"""
from decimal import Decimal, InvalidOperation
from app.services import normalizza_iso

CENTESIMO = Decimal('0.01')


class ValidationUtils:
    """Utilità per la validazione dei dati in ingresso dai form/JSON"""

    @staticmethod
    def validate_amount(amount):
        """Valida e converte un importo in Decimal con 2 decimali.

        Accetta numeri e stringhe ("10.5", "10,50"); rifiuta negativi, valori
        non finiti e più di 2 cifre decimali.
        """
        if isinstance(amount, bool) or amount is None:
            raise ValueError("Importo non valido")
        try:
            valore = Decimal(str(amount).strip().replace(',', '.'))
        except (InvalidOperation, ValueError):
            raise ValueError("Importo non valido")
        if not valore.is_finite():
            raise ValueError("Importo non valido")
        if valore < 0:
            raise ValueError("L'importo non può essere negativo")
        if valore != valore.quantize(CENTESIMO):
            raise ValueError("L'importo può avere al massimo 2 decimali")
        return valore.quantize(CENTESIMO)

    @staticmethod
    def validate_date(date_str, field_name='data'):
        """Valida una data `YYYY-MM-DD` e la restituisce in forma canonica"""
        valore = normalizza_iso(date_str)
        if valore is None:
            raise ValueError(f"Formato {field_name} non valido (YYYY-MM-DD)")
        return valore

    @staticmethod
    def validate_optional_date(date_str, field_name='data'):
        """Come validate_date, ma '' e None diventano None"""
        if date_str is None or (isinstance(date_str, str) and not date_str.strip()):
            return None
        return ValidationUtils.validate_date(date_str, field_name)

    @staticmethod
    def validate_required_field(value, field_name):
        """Valida che un campo obbligatorio non sia vuoto"""
        if value is None or not str(value).strip():
            raise ValueError(f"Il campo {field_name} è obbligatorio")
        return str(value).strip()

    @staticmethod
    def validate_choice(value, choices, field_name):
        """Valida che il valore appartenga all'elenco ammesso"""
        if value not in choices:
            raise ValueError(f"Valore non valido per {field_name}: {value!r}")
        return value


class SecurityUtils:
    """Utilità per la sicurezza"""

    @staticmethod
    def sanitize_string(input_str, max_length=None):
        """Sanitizza una stringa di input"""
        if not input_str:
            return ""

        sanitized = str(input_str).strip()

        # Tronca se necessario
        if max_length and len(sanitized) > max_length:
            sanitized = sanitized[:max_length]

        return sanitized
