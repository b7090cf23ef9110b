from rest_framework import permissions, viewsets

from .models import CreditLedgerEntry
from .serializers import CreditLedgerEntrySerializer


class CreditLedgerViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Credit history. Members see their own entries, operators everyone's.
    """

    queryset = CreditLedgerEntry.objects.all()
    serializer_class = CreditLedgerEntrySerializer
    permission_classes = [permissions.IsAuthenticated]
    filterset_fields = ['member', 'actor', 'reference']
    ordering_fields = ['created_at', 'amount']
    ordering = ['-created_at', '-id']

    def get_queryset(self):
        qs = super().get_queryset()
        if getattr(self, 'swagger_fake_view', False):
            return qs.none()
        if not self.request.user.is_operator:
            qs = qs.filter(member=self.request.user)
        return qs
