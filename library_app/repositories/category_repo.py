from library_app.models.category import Category
from library_app.extensions import db


class CategoryRepo:
    @staticmethod
    def list_all():
        return Category.query.order_by(Category.name.asc()).all()

    @staticmethod
    def get_many(category_ids):
        if not category_ids:
            return []
        return Category.query.filter(Category.id.in_(list(category_ids))).all()

    @staticmethod
    def get_by_name(name: str):
        return Category.query.filter_by(name=name).first()

    @staticmethod
    def create(category: Category, commit: bool = True):
        db.session.add(category)
        if commit:
            db.session.commit()
        return category
