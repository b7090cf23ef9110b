from django.core.management.base import BaseCommand
from giveaway.models import Giveaway


class Command(BaseCommand):
    help = 'Create an OPEN giveaway.'

    def add_arguments(self, parser):
        parser.add_argument('title')
        parser.add_argument('--slots', type=int, default=36)
        parser.add_argument('--box-topper', action='store_true')
        parser.add_argument('--min-participation', type=int, default=10000)
        parser.add_argument('--free-entries', type=int, default=10)
        parser.add_argument('--cost', type=int, default=1)

    def handle(self, *args, **options):
        giveaway = Giveaway(
            title=options['title'],
            slot_count=options['slots'],
            has_box_topper=options['box_topper'],
            min_participation=options['min_participation'],
            free_entries_per_user=options['free_entries'],
            credit_cost_per_pick=options['cost'],
        )
        giveaway.full_clean()
        giveaway.save()
        self.stdout.write(f'Created giveaway {giveaway.pk}')
