from flask import Flask, jsonify
from library_app.config import Config
from library_app.extensions import db, migrate, jwt, mail
from library_app.errors import register_error_handlers


def _register_jwt_handlers():
    def _unauthorized(message):
        return jsonify({"success": False, "error": "Unauthorized", "message": message}), 401

    @jwt.unauthorized_loader
    def _missing_token(_reason):
        return _unauthorized("Yetkilendirme token'ı gerekli")

    @jwt.invalid_token_loader
    def _invalid_token(_reason):
        return _unauthorized("Geçersiz veya süresi dolmuş token")

    @jwt.expired_token_loader
    def _expired_token(_header, _payload):
        return _unauthorized("Geçersiz veya süresi dolmuş token")

    @jwt.needs_fresh_token_loader
    def _needs_fresh(_header, _payload):
        return _unauthorized("Bu işlem için yeniden giriş yapmalısınız")

    @jwt.revoked_token_loader
    def _revoked(_header, _payload):
        return _unauthorized("Token iptal edilmiş")


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    # 1) Önce db init (db.engine / db.session için şart)
    db.init_app(app)
    import library_app.models  # noqa: F401  (tablolar metadata'ya kayıtlı olsun)

    # 2) Diğer extension'lar
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)
    _register_jwt_handlers()

    register_error_handlers(app)

    # 3) API blueprintleri (url_prefix burada veriliyor, blueprint içinde tekrar verme)
    from library_app.controllers.auth_controller import auth_bp
    from library_app.controllers.book_controller import book_bp
    from library_app.controllers.borrow_controller import borrow_bp
    from library_app.controllers.category_controller import category_bp
    from library_app.controllers.favorite_controller import favorite_bp
    from library_app.controllers.stats_controller import stats_bp
    from library_app.controllers.user_controller import user_bp
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(book_bp, url_prefix="/api/books")
    app.register_blueprint(borrow_bp, url_prefix="/api/borrows")
    app.register_blueprint(category_bp, url_prefix="/api/categories")
    app.register_blueprint(favorite_bp, url_prefix="/api/favorites")
    app.register_blueprint(stats_bp, url_prefix="/api/stats")
    app.register_blueprint(user_bp, url_prefix="/api/users")

    from library_app.commands import register_commands
    register_commands(app)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    # Scheduler (periyodik ödünç raporu)
    from library_app.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
