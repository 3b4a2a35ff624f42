"""
İstek gövdeleri için doğrulanmış tipler.

Controller'lar request.get_json() sonucunu doğrudan servislere vermez; önce bu
modellerden birine parse eder. Hatalı gövde pydantic.ValidationError fırlatır
ve 400 olarak döner (bkz. errors.register_error_handlers).
"""
import math
import re
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from library_app.models.user import ROLES, ROLE_USER, normalize_role

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
BASE64_PREFIX = "data:image/jpeg;base64,"
MAX_IMAGE_BYTES = 5 * 1024 * 1024


def _strip_required(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError("boş olamaz")
    return value


def _check_email(value: str) -> str:
    value = (value or "").strip()
    if not EMAIL_RE.match(value):
        raise ValueError("Geçerli bir email adresi giriniz")
    return value


def _check_role(value: str) -> str:
    value = normalize_role(value)
    if value not in ROLES:
        raise ValueError("Rol 'user' veya 'admin' olmalıdır")
    return value


def normalize_image_url(value: Optional[str]) -> Optional[str]:
    """Boş değer -> None; öneksiz base64 verisine jpeg data-URI öneki eklenir."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if value.startswith(("http://", "https://", "/")):
        return value
    if ";base64," not in value:
        return BASE64_PREFIX + value
    return value


def check_image(value: Optional[str]) -> Optional[str]:
    """URL'ler olduğu gibi geçer; data-URI görsel olmalı ve yaklaşık boyutu MAX_IMAGE_BYTES'ı aşmamalı."""
    if value is None or value.startswith(("http://", "https://", "/")):
        return value
    if not value.startswith("data:image/"):
        raise ValueError("Geçersiz görsel formatı")
    data = value.partition(",")[2]
    if not data:
        raise ValueError("Geçersiz görsel formatı")
    # base64 ikili veriden ~%33 büyüktür
    if math.ceil(len(data) * 3 / 4) > MAX_IMAGE_BYTES:
        raise ValueError("Görsel boyutu en fazla 5MB olabilir")
    return value


RequiredText = Annotated[str, AfterValidator(_strip_required)]
Email = Annotated[str, AfterValidator(_check_email)]
Role = Annotated[str, AfterValidator(_check_role)]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RegisterRequest(_Payload):
    name: RequiredText
    email: Email
    password: str = Field(min_length=6)


class LoginRequest(_Payload):
    email: RequiredText
    password: RequiredText


class BorrowRequest(_Payload):
    book_id: int = Field(alias="bookId", gt=0)


class FavoriteRequest(_Payload):
    book_id: int = Field(alias="bookId", gt=0)


class BookPayload(_Payload):
    title: RequiredText
    author: RequiredText
    published: int
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    category_ids: Optional[List[int]] = Field(default=None, alias="categoryIds")

    @field_validator("published")
    @classmethod
    def _published_year(cls, value: int) -> int:
        if value < 0 or value > 9999:
            raise ValueError("Yayın yılı geçerli bir sayı olmalıdır")
        return value

    @field_validator("image_url")
    @classmethod
    def _image(cls, value):
        return check_image(normalize_image_url(value))


class UserCreateRequest(RegisterRequest):
    role: Role = ROLE_USER


class UserUpdateRequest(_Payload):
    name: Optional[RequiredText] = None
    email: Optional[Email] = None
    role: Optional[Role] = None


class ProfileUpdateRequest(_Payload):
    profile_image_url: Optional[str] = Field(default=None, alias="profileImageUrl")

    @field_validator("profile_image_url")
    @classmethod
    def _image(cls, value):
        if value is None or not value.strip():
            return None
        return check_image(value.strip())


class ImageUpdateRequest(_Payload):
    image_url: RequiredText = Field(alias="imageUrl")

    @field_validator("image_url")
    @classmethod
    def _image(cls, value):
        return check_image(normalize_image_url(value))
