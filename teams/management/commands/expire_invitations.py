"""
Django management command to mark expired invitations.

Reads already treat a pending invitation past its expiry as expired; this
command persists that status for reporting. Run it periodically (e.g. cron).
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand
from django.utils import timezone

from teams.infrastructure.repositories.django_invitation_repository import (
    DjangoInvitationRepository,
)

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to mark expired invitations."""

    help = "Mark pending invitations past their expiry as expired"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update invitations",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        updated = async_to_sync(self.expire)(options["dry_run"])
        if options["dry_run"]:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes were made"))
        else:
            # pylint: disable=no-member
            self.stdout.write(self.style.SUCCESS(f"Marked {updated} invitation(s) as expired"))

    async def expire(self, dry_run: bool) -> int:
        repository = DjangoInvitationRepository()
        now = timezone.now()
        stale = await repository.list_stale_pending(now)
        self.stdout.write(f"Found {len(stale)} expired invitation(s)")

        updated = 0
        for invitation in stale:
            if dry_run:
                self.stdout.write(f"  - {invitation.email} expired at {invitation.expires_at}")
                continue
            await repository.save(invitation.with_expiry_applied(now))
            logger.info("Marked invitation %s as expired", invitation.id)
            updated += 1
        return updated
