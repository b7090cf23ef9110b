from django.db import models
from django.utils import timezone


SYSTEM_ACTOR = 'system'


class CreditLedgerEntry(models.Model):
    """
    Append-only record of one change to a member's credit balance.
    """

    class Meta:
        db_table = 'credit_ledger'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['member', 'reference']),
        ]

    member = models.ForeignKey('api.Member', on_delete=models.PROTECT, related_name='ledger')
    amount = models.IntegerField()
    reason = models.CharField(max_length=255)
    balance_before = models.IntegerField()
    balance_after = models.IntegerField()
    actor = models.CharField(max_length=150, default=SYSTEM_ACTOR)
    reference = models.CharField(max_length=100, null=True, default=None)
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f'{self.member_id}: {self.amount:+d} ({self.reason})'

    def save(self, *args, **kwargs):
        if self.pk is not None:
            raise ValueError('Ledger entries are immutable.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError('Ledger entries cannot be deleted.')


class CreditClaim(models.Model):

    class Meta:
        db_table = 'credit_claim'
        constraints = [
            models.UniqueConstraint(fields=['member', 'giveaway'], name='unique_credit_claim'),
        ]

    member = models.ForeignKey('api.Member', on_delete=models.CASCADE)
    giveaway = models.ForeignKey('giveaway.Giveaway', on_delete=models.CASCADE)
    credits_claimed = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
