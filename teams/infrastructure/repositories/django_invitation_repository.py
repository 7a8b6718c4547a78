"""
Django implementation of InvitationRepository port.
"""

import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import Email, InvitationStatus, TeamRole
from teams.domain.invitation import Invitation
from teams.infrastructure.models import Invitation as InvitationModel
from teams.ports.team_repository import InvitationRepository


class DjangoInvitationRepository(InvitationRepository):
    """Django ORM implementation of InvitationRepository."""

    def _to_domain(self, model: InvitationModel) -> Invitation:
        return Invitation(
            id=model.id,
            team_id=model.team_id,
            email=Email(model.email),
            role=TeamRole(model.role),
            status=InvitationStatus(model.status),
            invited_by=model.invited_by_id,
            expires_at=model.expires_at,
            created_at=model.created_at,
            message_id=model.message_id,
        )

    @sync_to_async
    def save(self, invitation: Invitation) -> Invitation:
        model, _ = InvitationModel.objects.update_or_create(
            id=invitation.id,
            defaults={
                "team_id": invitation.team_id,
                "email": invitation.email.value,
                "role": invitation.role.value,
                "status": invitation.status.value,
                "invited_by_id": invitation.invited_by,
                "expires_at": invitation.expires_at,
                "created_at": invitation.created_at,
                "message_id": invitation.message_id,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, invitation_id: uuid.UUID) -> Optional[Invitation]:
        try:
            return self._to_domain(InvitationModel.objects.get(id=invitation_id))
        except InvitationModel.DoesNotExist:
            return None

    @sync_to_async
    def find_pending(self, team_id: uuid.UUID, email: str) -> Optional[Invitation]:
        model = InvitationModel.objects.filter(
            team_id=team_id,
            email=email,
            status=InvitationStatus.PENDING.value,
        ).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_by_team(
        self, team_id: uuid.UUID, stored_status: Optional[str] = None
    ) -> List[Invitation]:
        queryset = InvitationModel.objects.filter(team_id=team_id)
        if stored_status:
            queryset = queryset.filter(status=stored_status)
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def list_stale_pending(self, now) -> List[Invitation]:
        queryset = InvitationModel.objects.filter(
            status=InvitationStatus.PENDING.value, expires_at__lt=now
        )
        return [self._to_domain(model) for model in queryset]
