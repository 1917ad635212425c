from sift.models.applicant import Applicant
from sift.models.applicant_round import ApplicantRound
from sift.models.delibs_session import DelibsSession
from sift.models.delibs_vote import DelibsVote
from sift.models.organization import Organization, OrganizationUser
from sift.models.recruitment_cycle import RecruitmentCycle
from sift.models.recruitment_round import RecruitmentRound
from sift.models.user import User

__all__ = [
    "User",
    "Organization",
    "OrganizationUser",
    "RecruitmentCycle",
    "RecruitmentRound",
    "Applicant",
    "ApplicantRound",
    "DelibsSession",
    "DelibsVote",
]
