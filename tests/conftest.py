from pathlib import Path
import sys
import os

import pytest
from flask import g
from werkzeug.security import generate_password_hash

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from sift import create_app
from sift.extensions import db
from sift.models import (
    Applicant,
    ApplicantRound,
    Organization,
    OrganizationUser,
    RecruitmentCycle,
    RecruitmentRound,
    User,
)

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {},
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


def _make_user(db_session, username):
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=generate_password_hash(TEST_PASSWORD, method="pbkdf2:sha256"),
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def owner_user(db_session):
    return _make_user(db_session, "owner1")


@pytest.fixture()
def admin_user(db_session):
    return _make_user(db_session, "admin1")


@pytest.fixture()
def member_user(db_session):
    return _make_user(db_session, "member1")


@pytest.fixture()
def second_member_user(db_session):
    return _make_user(db_session, "member2")


@pytest.fixture()
def outsider_user(db_session):
    return _make_user(db_session, "outsider1")


@pytest.fixture()
def organization(db_session, owner_user, admin_user, member_user, second_member_user):
    org = Organization(name="Robotics Club", owner_id=owner_user.id)
    db_session.add(org)
    db_session.flush()

    db_session.add_all(
        [
            OrganizationUser(organization_id=org.id, user_id=owner_user.id, role="Owner"),
            OrganizationUser(organization_id=org.id, user_id=admin_user.id, role="Admin"),
            OrganizationUser(
                organization_id=org.id, user_id=member_user.id, role="Member"
            ),
            OrganizationUser(
                organization_id=org.id, user_id=second_member_user.id, role="Member"
            ),
        ]
    )
    db_session.commit()
    return org


@pytest.fixture()
def cycle(db_session, organization):
    recruitment_cycle = RecruitmentCycle(organization_id=organization.id, name="Fall 2026")
    db_session.add(recruitment_cycle)
    db_session.commit()
    return recruitment_cycle


@pytest.fixture()
def first_round(db_session, cycle):
    recruitment_round = RecruitmentRound(
        recruitment_cycle_id=cycle.id, name="Interviews", sort_order=1
    )
    db_session.add(recruitment_round)
    db_session.commit()
    return recruitment_round


@pytest.fixture()
def last_round(db_session, cycle, first_round):
    recruitment_round = RecruitmentRound(
        recruitment_cycle_id=cycle.id, name="Final Delibs", sort_order=2
    )
    db_session.add(recruitment_round)
    db_session.commit()
    return recruitment_round


def add_applicant(db_session, cycle, recruitment_round, name):
    applicant = Applicant(recruitment_cycle_id=cycle.id, name=name)
    db_session.add(applicant)
    db_session.flush()

    applicant_round = ApplicantRound(
        applicant_id=applicant.id, recruitment_round_id=recruitment_round.id
    )
    db_session.add(applicant_round)
    db_session.commit()
    return applicant_round


@pytest.fixture()
def applicant_a(db_session, cycle, first_round):
    return add_applicant(db_session, cycle, first_round, "Ada")


@pytest.fixture()
def applicant_b(db_session, cycle, first_round):
    return add_applicant(db_session, cycle, first_round, "Brook")


@pytest.fixture()
def last_round_applicant(db_session, cycle, last_round):
    return add_applicant(db_session, cycle, last_round, "Quinn")


@pytest.fixture()
def make_applicant(db_session, cycle):
    def _make(recruitment_round, name):
        return add_applicant(db_session, cycle, recruitment_round, name)

    return _make


@pytest.fixture()
def login(client):
    def _login(user):
        with client.session_transaction() as session:
            session["_user_id"] = str(user.id)
            session["_fresh"] = True
        # Requests share the fixture's app context, so drop the cached user.
        g.pop("_login_user", None)
        return client

    return _login


@pytest.fixture()
def user_password():
    return TEST_PASSWORD
