"""
Management command to create the administrator account
"""
import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = 'Create a staff superuser if it does not exist yet'

    def add_arguments(self, parser):
        parser.add_argument('--username', default=os.environ.get('DJANGO_ADMIN_USERNAME', 'admin'))
        parser.add_argument('--email', default=os.environ.get('DJANGO_ADMIN_EMAIL', 'admin@example.com'))
        parser.add_argument('--password', default=os.environ.get('DJANGO_ADMIN_PASSWORD'))

    def handle(self, *args, **options):
        User = get_user_model()
        username = options['username']

        if User.objects.filter(username=username).exists():
            self.stdout.write(self.style.WARNING(f'Administrator "{username}" already exists'))
            return

        if not options['password']:
            raise CommandError('A password is required (--password or DJANGO_ADMIN_PASSWORD)')

        User.objects.create_superuser(
            username=username,
            email=options['email'],
            password=options['password'],
        )
        self.stdout.write(self.style.SUCCESS(f'✓ Administrator "{username}" created'))
