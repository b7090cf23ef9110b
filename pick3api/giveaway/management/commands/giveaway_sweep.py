import logging

from django.core.management.base import BaseCommand
from giveaway.lifecycle import close_expired

logger = logging.getLogger('giveaway_sweep')


class Command(BaseCommand):
    help = 'Close FILLING giveaways whose entry cutoff has passed. Run every 15 minutes.'

    def handle(self, *args, **options):
        closed = close_expired()
        logger.info(f'{len(closed)} giveaways closed')
        self.stdout.write(f'Closed {len(closed)}: {closed}')
