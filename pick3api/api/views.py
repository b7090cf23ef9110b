import logging

from drf_yasg.utils import swagger_auto_schema
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, permissions, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from credits import ledger
from credits.exceptions import CreditError
from credits.serializers import CreditAdjustmentSerializer, CreditLedgerEntrySerializer

from .models import Member
from .permissions import IsOperator
from .serializers import MemberSerializer


logger = logging.getLogger('api.views')


class MemberViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Member.objects.all()
    serializer_class = MemberSerializer
    permission_classes = [IsOperator]
    filter_backends = [filters.SearchFilter, DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['role', 'username']
    search_fields = ['username']
    ordering_fields = ['credits', 'joined_at']
    ordering = ['username']


class LoggedInView(APIView):
    """
    The authenticated member, including the current credit balance.
    """

    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(responses={200: MemberSerializer(many=False)})
    def get(self, request):
        return Response(MemberSerializer(request.user).data)


class MemberCreditsView(APIView):
    """
    Operator credit adjustment. The balance never goes below zero.
    """

    permission_classes = [IsOperator]

    @swagger_auto_schema(request_body=CreditAdjustmentSerializer)
    def post(self, request, pk):
        member = Member.objects.filter(pk=pk)
        if not member.exists():
            raise NotFound('User not found.')
        member = member[0]
        s = CreditAdjustmentSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            entry = ledger.adjust(
                member,
                s.validated_data['amount'],
                s.validated_data['reason'],
                actor=request.user.username,
            )
        except CreditError as e:
            return Response({'error': str(e), 'code': e.code}, status=e.status_code)
        logger.info(f'{request.user} adjusted credits of {member} by {entry.amount}')
        return Response({
            'user': MemberSerializer(member).data,
            'log': CreditLedgerEntrySerializer(entry).data,
        })
