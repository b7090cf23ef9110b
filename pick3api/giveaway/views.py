import logging

from django.conf import settings
from drf_yasg.utils import swagger_auto_schema
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import CanParticipate, IsOperator
from credits.exceptions import CreditError
from credits.utils import claim_free_credits

from . import allocator, cancellation, lifecycle, resolver
from .exceptions import GiveawayError, InvalidSlot
from .models import Giveaway, Pick, Winner
from .serializers import (
    BulkPickRequestSerializer,
    DrawRequestSerializer,
    GiveawaySerializer,
    GiveawayStatsSerializer,
    PickRequestSerializer,
    PickSerializer,
    RefundSerializer,
    SlotOverviewSerializer,
    SuggestionSerializer,
    WinnerSerializer,
)
from .suggestions import slot_overview, suggest

logger = logging.getLogger('giveaway.views')


def _pick_payload(pick):
    return {
        'slot': pick.slot,
        'pickNumber': pick.pick_number,
        'isFreeEntry': pick.is_free_entry,
    }


class GiveawayViewSet(mixins.CreateModelMixin, viewsets.ReadOnlyModelViewSet):
    queryset = Giveaway.objects.all()
    serializer_class = GiveawaySerializer
    filterset_fields = ['status', 'has_box_topper']
    ordering_fields = ['created_at', 'draw_date', 'total_picks']
    ordering = ['-created_at']

    def get_permissions(self):
        if self.action == 'create':
            return [IsOperator()]
        return [permissions.AllowAny()]

    def perform_create(self, serializer):
        giveaway = serializer.save()
        logger.info(f'Giveaway {giveaway.pk} "{giveaway.title}" created by {self.request.user}')


class WinnerViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Winner.objects.select_related('member', 'giveaway')
    serializer_class = WinnerSerializer
    filterset_fields = ['giveaway', 'member']
    ordering_fields = ['created_at', 'slot']
    ordering = ['-created_at', 'slot']


class GiveawayActionView(APIView):
    """
    Base for the endpoints driving the giveaway engine. Engine rejections
    become ``{"error", "code"}`` responses.
    """

    def handle_exception(self, exc):
        if isinstance(exc, (GiveawayError, CreditError)):
            return Response({'error': str(exc), 'code': exc.code}, status=exc.status_code)
        if isinstance(exc, Giveaway.DoesNotExist):
            exc = NotFound('Giveaway not found.')
        return super().handle_exception(exc)

    def get_giveaway(self, pk):
        giveaway = Giveaway.objects.filter(pk=pk)
        if not giveaway.exists():
            raise NotFound('Giveaway not found.')
        return giveaway[0]


class PickView(GiveawayActionView):
    """
    Reserve a number in a slot, paid with a free entry or credits.
    """

    permission_classes = [CanParticipate]

    @swagger_auto_schema(request_body=PickRequestSerializer)
    def post(self, request, pk):
        s = PickRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        pick = allocator.place_pick(
            pk,
            request.user,
            s.validated_data['slot'],
            s.validated_data['pickNumber'],
            use_free_entry=s.validated_data['useFreeEntry'],
        )
        return Response({'success': True, 'pick': _pick_payload(pick)}, status=status.HTTP_201_CREATED)


class BulkPickView(GiveawayActionView):
    """
    Place several picks at once at suggested numbers.
    """

    permission_classes = [CanParticipate]

    @swagger_auto_schema(request_body=BulkPickRequestSerializer)
    def post(self, request, pk):
        s = BulkPickRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        result = allocator.auto_pick(
            pk,
            request.user,
            count=s.validated_data['count'],
            target_slot=s.validated_data['targetSlot'],
            use_free_entries=s.validated_data['useFreeEntries'],
        )
        return Response({
            'success': True,
            'picksCreated': result.picks_created,
            'creditsUsed': result.credits_used,
            'freeEntriesUsed': result.free_entries_used,
            'picks': [_pick_payload(p) for p in result.picks],
        })


class AutoPickView(GiveawayActionView):
    """
    Suggest the least crowded slot and the number farthest from other picks.
    """

    @swagger_auto_schema(responses={200: SuggestionSerializer(many=False)})
    def get(self, request, pk):
        giveaway = self.get_giveaway(pk)
        return Response(SuggestionSerializer(suggest(giveaway, request.user)).data)


class SlotView(GiveawayActionView):

    @swagger_auto_schema(responses={200: SlotOverviewSerializer(many=False)})
    def get(self, request, pk, slot):
        giveaway = self.get_giveaway(pk)
        if slot not in giveaway.slots:
            raise InvalidSlot(giveaway.slots.start, giveaway.slot_count)
        return Response(SlotOverviewSerializer(slot_overview(giveaway, slot)).data)


class MyPicksView(GiveawayActionView):

    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(responses={200: PickSerializer(many=True)})
    def get(self, request, pk):
        giveaway = self.get_giveaway(pk)
        picks = Pick.objects.filter(giveaway=giveaway, member=request.user).order_by('slot', 'pick_number')
        used = allocator.free_entries_used(giveaway, request.user)
        return Response({
            'picks': PickSerializer(picks, many=True).data,
            'freeEntriesUsed': used,
            'freeEntriesRemaining': max(0, giveaway.free_entries_per_user - used),
        })


class ClaimCreditsView(GiveawayActionView):

    permission_classes = [CanParticipate]

    def post(self, request, pk):
        balance = claim_free_credits(request.user, pk)
        return Response({
            'success': True,
            'creditsGranted': settings.GIVEAWAY['CLAIM_CREDITS'],
            'newBalance': balance,
        })


class CloseView(GiveawayActionView):
    """
    Close a FILLING giveaway for drawing before its cutoff.
    """

    permission_classes = [IsOperator]

    def post(self, request, pk):
        giveaway = lifecycle.close(pk)
        return Response({'success': True, 'giveaway': GiveawaySerializer(giveaway).data})


class RecalculateDrawView(GiveawayActionView):

    permission_classes = [IsOperator]

    def post(self, request, pk):
        giveaway = lifecycle.recalculate_schedule(pk)
        return Response({
            'success': True,
            'drawDate': giveaway.draw_date,
            'entryCutoff': giveaway.entry_cutoff,
        })


class DrawView(GiveawayActionView):
    """
    Submit the published Pick 3 result and settle the giveaway.
    """

    permission_classes = [IsOperator]

    @swagger_auto_schema(request_body=DrawRequestSerializer)
    def post(self, request, pk):
        s = DrawRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        winners = resolver.resolve(pk, s.validated_data['pick3Result'])
        return Response({
            'success': True,
            'winnersCount': len(winners),
            'pick3Result': s.validated_data['pick3Result'],
        })


class CancelView(GiveawayActionView):

    permission_classes = [IsOperator]

    @swagger_auto_schema(responses={200: RefundSerializer(many=False)})
    def post(self, request, pk):
        summary = cancellation.cancel(pk, actor=request.user.username)
        return Response({
            'success': True,
            'message': 'Giveaway cancelled and credits refunded',
            **RefundSerializer(summary).data,
        })


class StatsView(GiveawayActionView):

    permission_classes = [IsOperator]

    @swagger_auto_schema(responses={200: GiveawayStatsSerializer(many=False)})
    def get(self, request, pk):
        giveaway = self.get_giveaway(pk)
        return Response(GiveawayStatsSerializer.for_giveaway(giveaway).data)
