from django.db.models import Count, Q
from rest_framework import serializers

from .models import Giveaway, Pick, Winner


class GiveawaySerializer(serializers.ModelSerializer):
    winners_count = serializers.SerializerMethodField('get_winners_count')

    class Meta:
        model = Giveaway
        fields = [
            'id',
            'title',
            'description',
            'slot_count',
            'has_box_topper',
            'min_participation',
            'free_entries_per_user',
            'credit_cost_per_pick',
            'status',
            'total_picks',
            'draw_date',
            'entry_cutoff',
            'pick3_result',
            'pick3_date',
            'created_at',
            'winners_count',
        ]
        read_only_fields = [
            'status',
            'total_picks',
            'draw_date',
            'entry_cutoff',
            'pick3_result',
            'pick3_date',
            'created_at',
        ]

    def get_winners_count(self, instance):
        return instance.winners.count()


class PickSerializer(serializers.ModelSerializer):

    class Meta:
        model = Pick
        fields = ['id', 'giveaway', 'slot', 'pick_number', 'is_free_entry', 'credit_cost', 'created_at']


class WinnerSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='member.username', read_only=True)

    class Meta:
        model = Winner
        fields = ['id', 'giveaway', 'member', 'username', 'slot', 'pick_number', 'distance', 'created_at']


class PickRequestSerializer(serializers.Serializer):
    slot = serializers.IntegerField()
    # Accepts 7, "7" or "007", normalised by the allocator
    pickNumber = serializers.CharField()
    useFreeEntry = serializers.BooleanField(default=False)


class BulkPickRequestSerializer(serializers.Serializer):
    count = serializers.IntegerField(default=1)
    targetSlot = serializers.IntegerField(required=False, allow_null=True, default=None)
    useFreeEntries = serializers.BooleanField(default=False)


class DrawRequestSerializer(serializers.Serializer):
    pick3Result = serializers.CharField(trim_whitespace=False)


class SuggestionSerializer(serializers.Serializer):
    slot = serializers.IntegerField()
    pickNumber = serializers.CharField(source='pick_number', allow_null=True)
    slotPickCount = serializers.IntegerField(source='slot_pick_count')
    reason = serializers.CharField(source='rationale')


class GapSerializer(serializers.Serializer):
    start = serializers.IntegerField()
    end = serializers.IntegerField()
    size = serializers.IntegerField()


class SlotOverviewSerializer(serializers.Serializer):
    slot = serializers.IntegerField()
    taken_numbers = serializers.ListField(child=serializers.CharField())
    total_taken = serializers.IntegerField()
    total_available = serializers.IntegerField()
    largest_gaps = GapSerializer(many=True)


class RefundSerializer(serializers.Serializer):
    totalCreditsRefunded = serializers.IntegerField(source='total_credits_refunded')
    usersRefunded = serializers.IntegerField(source='users_refunded')
    totalPicks = serializers.IntegerField(source='total_picks')


class GiveawayStatsSerializer(serializers.Serializer):
    creditPicks = serializers.IntegerField()
    freePicks = serializers.IntegerField()
    totalPicks = serializers.IntegerField()
    uniqueUsers = serializers.IntegerField()

    @classmethod
    def for_giveaway(cls, giveaway):
        stats = Pick.objects.filter(giveaway=giveaway).aggregate(
            credit=Count('id', filter=Q(is_free_entry=False)),
            free=Count('id', filter=Q(is_free_entry=True)),
            users=Count('member', distinct=True),
        )
        return cls({
            'creditPicks': stats['credit'],
            'freePicks': stats['free'],
            'totalPicks': stats['credit'] + stats['free'],
            'uniqueUsers': stats['users'],
        })
