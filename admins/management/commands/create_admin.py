"""
Django management command to provision a console admin.

Creates (or reuses) a Django user and links an Admin profile to it so the
user can log in to the license console.
"""

import logging

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from admins.infrastructure.models import Admin as AdminModel

logger = logging.getLogger(__name__)
User = get_user_model()


class Command(BaseCommand):
    """Command to create a console admin."""

    help = "Create an admin profile (and its login user) for the license console"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("email", type=str, help="Admin email, also used as username")
        parser.add_argument("--password", type=str, default=None, help="Password for a new user")
        parser.add_argument("--first-name", type=str, default="", help="First name")
        parser.add_argument("--last-name", type=str, default="", help="Last name")
        parser.add_argument(
            "--licenses",
            type=int,
            default=0,
            help="Initial purchased license count (default: 0)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        email = options["email"].strip().lower()
        if "@" not in email:
            raise CommandError(f"Invalid email address: {email}")
        if options["licenses"] < 0:
            raise CommandError("--licenses must not be negative")

        with transaction.atomic():
            user, created = User.objects.get_or_create(
                username=email,
                defaults={
                    "email": email,
                    "first_name": options["first_name"],
                    "last_name": options["last_name"],
                },
            )
            if created:
                if options["password"]:
                    user.set_password(options["password"])
                else:
                    user.set_unusable_password()
                user.save()

            if AdminModel.objects.filter(email=email).exists():
                raise CommandError(f"Admin {email} already exists")

            admin = AdminModel.objects.create(
                user=user,
                email=email,
                first_name=options["first_name"],
                last_name=options["last_name"],
                purchased_license_count=options["licenses"],
            )

        logger.info("Admin created", extra={"admin_id": str(admin.id)})
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Created admin {admin.email} ({admin.id})"))
