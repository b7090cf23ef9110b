from rest_framework import serializers

from .models import CreditLedgerEntry


class CreditLedgerEntrySerializer(serializers.ModelSerializer):

    class Meta:
        model = CreditLedgerEntry
        fields = [
            'id', 'member', 'amount', 'reason', 'balance_before', 'balance_after',
            'actor', 'reference', 'created_at',
        ]


class CreditAdjustmentSerializer(serializers.Serializer):
    amount = serializers.IntegerField()
    reason = serializers.CharField(max_length=255)

    def validate_amount(self, value):
        if value == 0:
            raise serializers.ValidationError('Amount is required.')
        return value
