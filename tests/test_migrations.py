from pathlib import Path

from flask_migrate import downgrade, upgrade
from sqlalchemy import inspect

from sift import create_app
from sift.extensions import db

MIGRATIONS_DIR = str(Path(__file__).resolve().parents[1] / "migrations")


def test_migrations_upgrade_and_downgrade_on_sqlite(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'migrated.sqlite3'}",
            "SQLALCHEMY_ENGINE_OPTIONS": {},
        }
    )

    with app.app_context():
        upgrade(directory=MIGRATIONS_DIR)

        inspector = inspect(db.engine)
        assert {"delibs_sessions", "delibs_votes"} <= set(inspector.get_table_names())
        columns = {column["name"] for column in inspector.get_columns("applicant_rounds")}
        assert {"last_decision", "decided_by"} <= columns
        foreign_keys = inspector.get_foreign_keys("applicant_rounds")
        assert any(fk["constrained_columns"] == ["decided_by"] for fk in foreign_keys)

        downgrade(directory=MIGRATIONS_DIR, revision="3f1c9a2b7d40")

        inspector = inspect(db.engine)
        assert "delibs_votes" not in inspector.get_table_names()
        columns = {column["name"] for column in inspector.get_columns("applicant_rounds")}
        assert "decided_by" not in columns
        db.session.remove()
