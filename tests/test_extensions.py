from app.extensions import ma


def test_marshmallow_has_sqlalchemy_integration():
    assert hasattr(ma, "SQLAlchemyAutoSchema")
