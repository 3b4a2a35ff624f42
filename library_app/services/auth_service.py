from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from sqlalchemy.exc import IntegrityError

from library_app.extensions import db
from library_app.errors import Conflict, NotFound, Unauthorized
from library_app.models.user import User, ROLE_USER, normalize_role
from library_app.repositories.user_repo import UserRepo


class AuthService:
    @staticmethod
    def register(name: str, email: str, password: str, role: str = ROLE_USER):
        if UserRepo.get_by_email(email):
            raise Conflict("Bu email adresi zaten kullanımda")

        user = User(
            name=name,
            email=email.strip().lower(),
            password_hash=generate_password_hash(password),
            role=normalize_role(role) or ROLE_USER,
        )
        try:
            UserRepo.create(user)
        except IntegrityError:
            # email unique: eşzamanlı ikinci kayıt
            db.session.rollback()
            raise Conflict("Bu email adresi zaten kullanımda")
        current_app.logger.info(f"[auth] user={user.id} role={user.role} kaydedildi")
        return user

    @staticmethod
    def access_token_for(user: User) -> str:
        return create_access_token(
            identity=str(user.id),
            additional_claims={"role": normalize_role(user.role), "email": user.email},
        )

    @staticmethod
    def login(email: str, password: str):
        """
        return: (access_token, refresh_token, user)
        Refresh token'ın jti değeri kullanıcıya yazılır; önceki refresh token geçersiz olur.
        """
        user = UserRepo.get_by_email(email)
        if not user or not check_password_hash(user.password_hash, password):
            raise Unauthorized("Hatalı email veya şifre")

        access_token = AuthService.access_token_for(user)
        refresh_token = create_refresh_token(identity=str(user.id))

        user.refresh_token_jti = decode_token(refresh_token)["jti"]
        UserRepo.update()

        current_app.logger.info(f"[auth] user={user.id} giriş yaptı")
        return access_token, refresh_token, user

    @staticmethod
    def refresh(user_id: int, jti: str) -> str:
        user = UserRepo.get_by_id(user_id)
        if not user or not user.refresh_token_jti or user.refresh_token_jti != jti:
            raise Unauthorized("Geçersiz veya süresi dolmuş yenileme token'ı")
        # rol değişmiş olabilir; claim'i veritabanından üret
        return AuthService.access_token_for(user)

    @staticmethod
    def logout(user_id: int):
        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFound("Kullanıcı bulunamadı")
        user.refresh_token_jti = None
        UserRepo.update()
        current_app.logger.info(f"[auth] user={user.id} çıkış yaptı")
