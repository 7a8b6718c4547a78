"""
URL configuration for team API endpoints.
"""

from django.urls import path

from api.v1.teams import views

urlpatterns = [
    path("teams", views.TeamCollectionView.as_view(), name="teams"),
    path("teams/<uuid:team_id>", views.TeamDetailView.as_view(), name="team-detail"),
    path(
        "teams/<uuid:team_id>/invitations",
        views.TeamInvitationCollectionView.as_view(),
        name="team-invitations",
    ),
    path(
        "teams/<uuid:team_id>/invitations/<uuid:invitation_id>",
        views.TeamInvitationDetailView.as_view(),
        name="team-invitation-detail",
    ),
    path(
        "teams/<uuid:team_id>/members/<uuid:member_id>",
        views.TeamMemberDetailView.as_view(),
        name="team-member-detail",
    ),
]
