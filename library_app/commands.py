import click
from flask.cli import with_appcontext

from library_app.extensions import db
from library_app.models.category import Category
from library_app.models.user import ROLE_ADMIN
from library_app.repositories.category_repo import CategoryRepo
from library_app.services.auth_service import AuthService

DEFAULT_CATEGORIES = [
    ("Kurgu", "Roman, hikaye ve diğer kurgu eserler"),
    ("Bilim ve Eğitim", "Bilimsel ve eğitici kitaplar"),
    ("Klasikler", "Klasik edebi eserler"),
    ("Polisiye", "Suç ve dedektif hikayeleri"),
    ("Biyografi", "Gerçek yaşam hikayeleri"),
    ("Tarih", "Tarihi olaylar ve dönemler hakkında kitaplar"),
]


def seed_categories() -> int:
    """Eksik varsayılan kategorileri ekler; eklenen sayısını döner."""
    created = 0
    for name, description in DEFAULT_CATEGORIES:
        if CategoryRepo.get_by_name(name):
            continue
        CategoryRepo.create(Category(name=name, description=description), commit=False)
        created += 1
    db.session.commit()
    return created


@click.command("init-db")
@with_appcontext
def init_db_command():
    db.create_all()
    click.echo("Tablolar oluşturuldu.")


@click.command("seed-categories")
@with_appcontext
def seed_categories_command():
    created = seed_categories()
    click.echo(f"{created} kategori eklendi.")


@click.command("create-admin")
@click.argument("name")
@click.argument("email")
@click.argument("password")
@with_appcontext
def create_admin_command(name, email, password):
    user = AuthService.register(name=name, email=email, password=password, role=ROLE_ADMIN)
    click.echo(f"Admin oluşturuldu: id={user.id} email={user.email}")


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_categories_command)
    app.cli.add_command(create_admin_command)
