from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


class Status(models.TextChoices):
    OPEN = 'OPEN'
    FILLING = 'FILLING'
    CLOSED = 'CLOSED'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'


ACCEPTING_PICKS = (Status.OPEN, Status.FILLING)
TERMINAL = (Status.COMPLETED, Status.CANCELLED)

BOX_TOPPER_SLOT = 0


class Giveaway(models.Model):

    class Meta:
        db_table = 'giveaway'

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    slot_count = models.PositiveSmallIntegerField(
        default=36, validators=[MinValueValidator(1), MaxValueValidator(100)],
    )
    has_box_topper = models.BooleanField(default=False)
    min_participation = models.PositiveIntegerField(default=10000)
    free_entries_per_user = models.PositiveIntegerField(default=10)
    credit_cost_per_pick = models.PositiveSmallIntegerField(
        default=1, validators=[MinValueValidator(1), MaxValueValidator(100)],
    )
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.OPEN, db_index=True)
    total_picks = models.PositiveIntegerField(default=0)
    draw_date = models.DateTimeField(null=True, blank=True, default=None)
    entry_cutoff = models.DateTimeField(null=True, blank=True, default=None)
    pick3_result = models.CharField(max_length=3, null=True, blank=True, default=None)
    pick3_date = models.DateTimeField(null=True, blank=True, default=None)
    created_at = models.DateTimeField(default=timezone.now)
    closed_at = models.DateTimeField(null=True, blank=True, default=None)
    cancelled_at = models.DateTimeField(null=True, blank=True, default=None)

    def __str__(self):
        return f'{self.title} ({self.status})'

    @property
    def slots(self):
        """Every valid slot number, box topper first."""
        first = BOX_TOPPER_SLOT if self.has_box_topper else 1
        return range(first, self.slot_count + 1)


class Pick(models.Model):

    class Meta:
        db_table = 'giveaway_pick'
        constraints = [
            models.UniqueConstraint(
                fields=['giveaway', 'member', 'slot', 'pick_number'], name='unique_member_pick',
            ),
        ]
        indexes = [
            models.Index(fields=['giveaway', 'slot']),
        ]

    giveaway = models.ForeignKey(Giveaway, on_delete=models.CASCADE, related_name='picks')
    member = models.ForeignKey('api.Member', on_delete=models.CASCADE, related_name='picks')
    slot = models.PositiveSmallIntegerField()
    pick_number = models.CharField(max_length=3)
    is_free_entry = models.BooleanField(default=False)
    # What was actually charged at placement, refunds use this and not the live price
    credit_cost = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f'{self.giveaway_id}/{self.slot}/{self.pick_number}'


class Winner(models.Model):

    class Meta:
        db_table = 'giveaway_winner'
        ordering = ['giveaway', 'slot']
        constraints = [
            models.UniqueConstraint(fields=['giveaway', 'slot'], name='unique_slot_winner'),
        ]

    giveaway = models.ForeignKey(Giveaway, on_delete=models.CASCADE, related_name='winners')
    member = models.ForeignKey('api.Member', on_delete=models.CASCADE, related_name='wins')
    slot = models.PositiveSmallIntegerField()
    pick_number = models.CharField(max_length=3)
    distance = models.PositiveSmallIntegerField()
    created_at = models.DateTimeField(default=timezone.now)
