import logging

from django.core.management.base import BaseCommand, CommandError
from credits.ledger import reconcile

logger = logging.getLogger('credits_reconcile')


class Command(BaseCommand):
    help = 'Report members whose credit balance does not match their ledger.'

    def handle(self, *args, **options):
        mismatches = reconcile()
        for member, balance, total in mismatches:
            logger.error(f'{member}: balance {balance} but ledger sums to {total}')
        if mismatches:
            raise CommandError(f'{len(mismatches)} members out of balance')
        self.stdout.write('All balances match the ledger')
