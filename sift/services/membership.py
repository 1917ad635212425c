"""Resolve a caller's role inside the organization that owns a round.

Every delibs and decision operation goes through these helpers instead of
checking ``organization_users`` inline, so the Owner/Admin/Member rules live
in one place.
"""

from flask import current_app

from sift.errors import Forbidden, NotFound
from sift.extensions import db
from sift.models import Organization, OrganizationUser, RecruitmentRound
from sift.models.organization import PRIVILEGED_ROLES, ROLE_OWNER


def resolve_role(user_id, organization_id):
    """Return the user's role in the organization, or ``None`` if denied."""
    if user_id is None or organization_id is None:
        return None

    membership = OrganizationUser.query.filter_by(
        organization_id=organization_id, user_id=user_id
    ).first()
    if membership:
        return membership.role

    organization = db.session.get(Organization, organization_id)
    if organization and organization.owner_id == user_id:
        return ROLE_OWNER

    return None


def require_member(user_id, organization_id, message=None):
    role = resolve_role(user_id, organization_id)
    if role is None:
        current_app.logger.warning(
            "User %s denied access to organization %s", user_id, organization_id
        )
        raise Forbidden(message or "Not authorized to access this round")
    return role


def require_privileged(user_id, organization_id, message=None):
    role = require_member(user_id, organization_id)
    if role not in PRIVILEGED_ROLES:
        current_app.logger.warning(
            "User %s with role %s attempted a privileged action in organization %s",
            user_id,
            role,
            organization_id,
        )
        raise Forbidden(message or "Only Owner or Admin can perform this action")
    return role


def get_round_or_404(round_id):
    recruitment_round = db.session.get(RecruitmentRound, round_id)
    if recruitment_round is None:
        raise NotFound("Recruitment round not found")
    return recruitment_round


def organization_id_for_round(recruitment_round):
    cycle = recruitment_round.recruitment_cycle
    if cycle is None or cycle.organization_id is None:
        raise NotFound("Organization not found")
    return cycle.organization_id


def count_members(organization_id):
    # Everyone resolve_role() lets in, including an owner with no membership row.
    user_ids = {
        user_id
        for (user_id,) in db.session.query(OrganizationUser.user_id).filter_by(
            organization_id=organization_id
        )
    }
    organization = db.session.get(Organization, organization_id)
    if organization and organization.owner_id is not None:
        user_ids.add(organization.owner_id)
    return len(user_ids)
