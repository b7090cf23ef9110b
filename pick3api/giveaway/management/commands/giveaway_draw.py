from django.core.management.base import BaseCommand, CommandError
from giveaway.exceptions import GiveawayError
from giveaway.models import Giveaway
from giveaway.resolver import resolve


class Command(BaseCommand):
    help = 'Settle a CLOSED giveaway with the published Pick 3 result.'

    def add_arguments(self, parser):
        parser.add_argument('giveaway', type=int)
        parser.add_argument('result')

    def handle(self, *args, **options):
        try:
            winners = resolve(options['giveaway'], options['result'])
        except Giveaway.DoesNotExist:
            raise CommandError(f'Giveaway {options["giveaway"]} does not exist.')
        except GiveawayError as e:
            raise CommandError(str(e))
        for winner in winners:
            self.stdout.write(
                f'slot {winner.slot}: {winner.member} with {winner.pick_number} (distance {winner.distance})'
            )
        self.stdout.write(f'{len(winners)} winners')
