"""
Team API views.

These endpoints are used by the admin dashboard to:
- Create and rename a team
- Invite emails into the team and cancel invitations
- Change member roles and remove members
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1 import providers
from api.v1.teams.serializers import (
    CreateTeamRequestSerializer,
    CreateTeamResponseSerializer,
    InvitationSerializer,
    InviteMemberRequestSerializer,
    InviteMemberResponseSerializer,
    RenameTeamRequestSerializer,
    TeamMemberSerializer,
    TeamOverviewSerializer,
    TeamSerializer,
    UpdateMemberRoleRequestSerializer,
)
from teams.application.commands.cancel_invitation import CancelInvitationCommand
from teams.application.commands.create_team import CreateTeamCommand
from teams.application.commands.invite_member import InviteMemberCommand
from teams.application.commands.remove_member import RemoveMemberCommand
from teams.application.commands.rename_team import RenameTeamCommand
from teams.application.commands.update_member_role import UpdateMemberRoleCommand
from teams.application.queries.get_team_overview import GetTeamOverviewQuery

ERROR_RESPONSES = {
    400: OpenApiResponse(description="Bad Request"),
    401: OpenApiResponse(description="Unauthorized - Login required"),
    403: OpenApiResponse(description="Forbidden"),
}


class TeamCollectionView(APIView):
    """View for the admin's team."""

    @extend_schema(
        operation_id="get_team",
        summary="Get Team",
        description=(
            "Team of the admin with members and pending invitations. "
            "team is null for an admin without a team."
        ),
        tags=["Teams"],
        responses={200: TeamOverviewSerializer, **ERROR_RESPONSES},
    )
    def get(self, request: Request) -> Response:
        """Get the team overview."""
        return async_to_sync(self._handle_overview)(request)

    async def _handle_overview(self, request: Request) -> Response:
        overview = await providers.team_overview_handler().handle(
            GetTeamOverviewQuery(admin_id=request.admin.id)
        )
        return Response(TeamOverviewSerializer(overview).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="create_team",
        summary="Create Team",
        description=(
            "Create a team owned by the admin. Only allow-listed email domains can "
            "create teams; the admin's licenses and purchased count move into the team."
        ),
        tags=["Teams"],
        request=CreateTeamRequestSerializer,
        responses={
            201: CreateTeamResponseSerializer,
            409: OpenApiResponse(description="Admin already belongs to a team"),
            **ERROR_RESPONSES,
        },
    )
    def post(self, request: Request) -> Response:
        """Create a team."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        serializer = CreateTeamRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = await providers.create_team_handler().handle(
            CreateTeamCommand(
                admin_id=request.admin.id,
                name=serializer.validated_data.get("name") or None,
            )
        )
        return Response(CreateTeamResponseSerializer(result).data, status=status.HTTP_201_CREATED)


class TeamDetailView(APIView):
    """View for renaming a team."""

    @extend_schema(
        operation_id="rename_team",
        summary="Rename Team",
        description="Owner only.",
        tags=["Teams"],
        request=RenameTeamRequestSerializer,
        responses={
            200: TeamSerializer,
            404: OpenApiResponse(description="Team not found"),
            **ERROR_RESPONSES,
        },
    )
    def patch(self, request: Request, team_id: uuid.UUID) -> Response:
        """Rename the team."""
        return async_to_sync(self._handle_rename)(request, team_id)

    async def _handle_rename(self, request: Request, team_id: uuid.UUID) -> Response:
        serializer = RenameTeamRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team = await providers.rename_team_handler().handle(
            RenameTeamCommand(
                actor_id=request.admin.id,
                team_id=team_id,
                name=serializer.validated_data["name"],
            )
        )
        return Response({"team": TeamSerializer(team).data}, status=status.HTTP_200_OK)


class TeamInvitationCollectionView(APIView):
    """View for inviting emails into a team."""

    @extend_schema(
        operation_id="invite_member",
        summary="Invite Member",
        description=(
            "Owner or admin only. The email must be in the team's domain. "
            "A failed send is reported in emailSent; the invitation is kept."
        ),
        tags=["Teams"],
        request=InviteMemberRequestSerializer,
        responses={
            201: InviteMemberResponseSerializer,
            409: OpenApiResponse(description="Already a member or already invited"),
            **ERROR_RESPONSES,
        },
    )
    def post(self, request: Request, team_id: uuid.UUID) -> Response:
        """Invite an email."""
        return async_to_sync(self._handle_invite)(request, team_id)

    async def _handle_invite(self, request: Request, team_id: uuid.UUID) -> Response:
        serializer = InviteMemberRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = await providers.invite_member_handler().handle(
            InviteMemberCommand(
                inviter_id=request.admin.id,
                team_id=team_id,
                email=serializer.validated_data["email"],
                role=serializer.validated_data["role"],
            )
        )
        return Response(
            InviteMemberResponseSerializer(result).data, status=status.HTTP_201_CREATED
        )


class TeamInvitationDetailView(APIView):
    """View for cancelling an invitation."""

    @extend_schema(
        operation_id="cancel_invitation",
        summary="Cancel Invitation",
        description="Owner or admin only. Only pending invitations can be cancelled.",
        tags=["Teams"],
        responses={
            200: InvitationSerializer,
            404: OpenApiResponse(description="Invitation not found"),
            **ERROR_RESPONSES,
        },
    )
    def delete(self, request: Request, team_id: uuid.UUID, invitation_id: uuid.UUID) -> Response:
        """Cancel an invitation."""
        return async_to_sync(self._handle_cancel)(request, team_id, invitation_id)

    async def _handle_cancel(
        self, request: Request, team_id: uuid.UUID, invitation_id: uuid.UUID
    ) -> Response:
        invitation = await providers.cancel_invitation_handler().handle(
            CancelInvitationCommand(
                actor_id=request.admin.id,
                team_id=team_id,
                invitation_id=invitation_id,
            )
        )
        return Response(
            {"message": "Invitation cancelled", "invitation": InvitationSerializer(invitation).data},
            status=status.HTTP_200_OK,
        )


class TeamMemberDetailView(APIView):
    """View for changing or removing a member."""

    @extend_schema(
        operation_id="update_member_role",
        summary="Update Member Role",
        description="Owner only. The owner's own role cannot be changed.",
        tags=["Teams"],
        request=UpdateMemberRoleRequestSerializer,
        responses={
            200: TeamMemberSerializer,
            404: OpenApiResponse(description="Member not found"),
            **ERROR_RESPONSES,
        },
    )
    def patch(self, request: Request, team_id: uuid.UUID, member_id: uuid.UUID) -> Response:
        """Change a member's role."""
        return async_to_sync(self._handle_update_role)(request, team_id, member_id)

    async def _handle_update_role(
        self, request: Request, team_id: uuid.UUID, member_id: uuid.UUID
    ) -> Response:
        serializer = UpdateMemberRoleRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = await providers.update_member_role_handler().handle(
            UpdateMemberRoleCommand(
                actor_id=request.admin.id,
                team_id=team_id,
                member_id=member_id,
                role=serializer.validated_data["role"],
            )
        )
        return Response(
            {"message": "Member role updated", "member": TeamMemberSerializer(member).data},
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        operation_id="remove_member",
        summary="Remove Member",
        description="Owner only. The owner cannot be removed.",
        tags=["Teams"],
        responses={
            200: OpenApiResponse(description="Member removed"),
            404: OpenApiResponse(description="Member not found"),
            **ERROR_RESPONSES,
        },
    )
    def delete(self, request: Request, team_id: uuid.UUID, member_id: uuid.UUID) -> Response:
        """Remove a member."""
        return async_to_sync(self._handle_remove)(request, team_id, member_id)

    async def _handle_remove(
        self, request: Request, team_id: uuid.UUID, member_id: uuid.UUID
    ) -> Response:
        await providers.remove_member_handler().handle(
            RemoveMemberCommand(actor_id=request.admin.id, team_id=team_id, member_id=member_id)
        )
        return Response({"message": "Member removed"}, status=status.HTTP_200_OK)
