from flask import jsonify, current_app
from pydantic import ValidationError


class LibraryError(Exception):
    """
    Servislerin fırlattığı tipli hatalar.
    Controller katmanı bunları yakalamaz; create_app içinde kayıtlı handler
    {"success": False, "error": kind, "message": ...} olarak döner.
    """
    kind = "LibraryError"
    status_code = 400
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(LibraryError):
    kind = "NotFound"
    status_code = 404


class Conflict(LibraryError):
    kind = "Conflict"
    status_code = 409


class Forbidden(LibraryError):
    kind = "Forbidden"
    status_code = 403


class Unauthorized(LibraryError):
    kind = "Unauthorized"
    status_code = 401


class ValidationFailed(LibraryError):
    kind = "ValidationFailed"
    status_code = 400


class StoreFailure(LibraryError):
    # Transaction tamamen geri alındı; çağıran tekrar deneyebilir
    kind = "StoreFailure"
    status_code = 503
    retryable = True


def _json_error(kind, message, code):
    return jsonify({"success": False, "error": kind, "message": message}), code


def _first_validation_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Geçersiz istek"
    err = errors[0]
    field = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
    msg = err.get("msg", "Geçersiz değer")
    # "Value error, ..." önekini kullanıcıya gösterme
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"{field}: {msg}" if field else msg


def register_error_handlers(app):
    @app.errorhandler(LibraryError)
    def _library_error(e: LibraryError):
        if isinstance(e, StoreFailure):
            current_app.logger.error(f"[store] {e.message}")
        return _json_error(e.kind, e.message, e.status_code)

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return _json_error("ValidationFailed", _first_validation_message(e), 400)

    @app.errorhandler(404)
    def _not_found(_e):
        return _json_error("NotFound", "Kaynak bulunamadı", 404)

    @app.errorhandler(405)
    def _method_not_allowed(_e):
        return _json_error("MethodNotAllowed", "Bu metot desteklenmiyor", 405)
