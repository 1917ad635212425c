from sift.routes.applicant import register_applicant_routes
from sift.routes.auth import register_auth_routes
from sift.routes.delibs import register_delibs_routes


def register_routes(app):
    register_auth_routes(app)
    register_delibs_routes(app)
    register_applicant_routes(app)
