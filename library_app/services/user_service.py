from flask import current_app

from library_app.errors import Conflict, NotFound
from library_app.repositories.borrow_repo import BorrowRepo
from library_app.repositories.user_repo import UserRepo
from library_app.schemas import ProfileUpdateRequest, UserCreateRequest, UserUpdateRequest
from library_app.services.auth_service import AuthService


class UserService:
    @staticmethod
    def list_users():
        return UserRepo.list_all()

    @staticmethod
    def get_user(user_id: int):
        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFound("Kullanıcı bulunamadı")
        return user

    @staticmethod
    def create_user(payload: UserCreateRequest):
        return AuthService.register(
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
        )

    @staticmethod
    def update_user(user_id: int, payload: UserUpdateRequest):
        user = UserService.get_user(user_id)

        if payload.email and payload.email.lower() != user.email.lower():
            other = UserRepo.get_by_email(payload.email)
            if other and other.id != user.id:
                raise Conflict("Bu email adresi başka bir kullanıcı tarafından kullanılıyor")
            user.email = payload.email.lower()
        if payload.name:
            user.name = payload.name
        if payload.role:
            if payload.role != user.role:
                current_app.logger.info(f"[users] user={user.id} rol {user.role} -> {payload.role}")
            user.role = payload.role

        UserRepo.update()
        return user

    @staticmethod
    def delete_user(user_id: int):
        user = UserService.get_user(user_id)
        # aktif ödünç varken silmek kitabı sonsuza dek müsait değil bırakır
        if BorrowRepo.count_active_by_user(user_id) > 0:
            raise Conflict("İade edilmemiş kitabı olan kullanıcı silinemez")
        UserRepo.delete_with_history(user)
        current_app.logger.info(f"[users] user={user_id} silindi")

    @staticmethod
    def update_profile(user_id: int, payload: ProfileUpdateRequest):
        user = UserService.get_user(user_id)
        user.profile_image_url = payload.profile_image_url
        UserRepo.update()
        return user
