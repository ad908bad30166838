"""
Management command to find pending requests that can no longer be approved
as filed: the tenant left the source room, got housed elsewhere, or a room
was deleted.
"""
from django.core.management.base import BaseCommand

from room_requests.services import RequestStore


class Command(BaseCommand):
    help = 'List stale pending room requests, optionally rejecting them'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reject',
            action='store_true',
            help='Reject every stale request with a system message',
        )

    def handle(self, *args, **options):
        store = RequestStore()
        stale = store.find_stale_pending()

        if not stale:
            self.stdout.write(self.style.SUCCESS('✓ No stale pending requests'))
            return

        for request, reason in stale:
            self.stdout.write(
                f'#{request.id} {request.request_type} tenant={request.tenant_id}: {reason}'
            )

        if not options['reject']:
            self.stdout.write(self.style.WARNING(f'{len(stale)} stale request(s). Re-run with --reject to reject them.'))
            return

        rejected = store.reject_stale()
        self.stdout.write(self.style.SUCCESS(f'✓ Rejected {len(rejected)} stale request(s)'))
