import pytest

from sift.errors import Forbidden
from sift.models import Organization, OrganizationUser
from sift.services.membership import (
    count_members,
    require_member,
    require_privileged,
    resolve_role,
)


def test_resolve_role_reads_membership_rows(
    organization, owner_user, admin_user, member_user, outsider_user
):
    assert resolve_role(owner_user.id, organization.id) == "Owner"
    assert resolve_role(admin_user.id, organization.id) == "Admin"
    assert resolve_role(member_user.id, organization.id) == "Member"
    assert resolve_role(outsider_user.id, organization.id) is None


def test_organization_owner_without_membership_row_is_owner(db_session, outsider_user):
    org = Organization(name="Solo Org", owner_id=outsider_user.id)
    db_session.add(org)
    db_session.commit()

    assert resolve_role(outsider_user.id, org.id) == "Owner"


def test_require_member_rejects_non_members(organization, outsider_user):
    with pytest.raises(Forbidden):
        require_member(outsider_user.id, organization.id)


def test_require_privileged_rejects_plain_members(organization, member_user, admin_user):
    with pytest.raises(Forbidden) as excinfo:
        require_privileged(member_user.id, organization.id)
    assert excinfo.value.status_code == 403

    assert require_privileged(admin_user.id, organization.id) == "Admin"


def test_count_members_includes_owner_without_membership_row(
    db_session, organization, owner_user
):
    assert count_members(organization.id) == 4

    OrganizationUser.query.filter_by(
        organization_id=organization.id, user_id=owner_user.id
    ).delete()
    db_session.commit()

    assert resolve_role(owner_user.id, organization.id) == "Owner"
    assert count_members(organization.id) == 4
