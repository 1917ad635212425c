from sift.clock import utcnow
from sift.extensions import db

ROLE_OWNER = "Owner"
ROLE_ADMIN = "Admin"
ROLE_MEMBER = "Member"
ROLES = (ROLE_OWNER, ROLE_ADMIN, ROLE_MEMBER)
PRIVILEGED_ROLES = (ROLE_OWNER, ROLE_ADMIN)


class Organization(db.Model):
    __tablename__ = "organizations"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    owner_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    members = db.relationship("OrganizationUser", backref="organization", lazy=True)
    recruitment_cycles = db.relationship(
        "RecruitmentCycle", backref="organization", lazy=True
    )


class OrganizationUser(db.Model):
    __tablename__ = "organization_users"
    __table_args__ = (
        db.UniqueConstraint(
            "organization_id", "user_id", name="uq_organization_users_org_user"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    organization_id = db.Column(
        db.Integer, db.ForeignKey("organizations.id"), nullable=False
    )
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_MEMBER)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
