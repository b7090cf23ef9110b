from django.urls import include, path
from rest_framework import routers
from .views import LoggedInView, MemberCreditsView, MemberViewSet
from credits.views import CreditLedgerViewSet
from giveaway.views import (
    AutoPickView,
    BulkPickView,
    CancelView,
    ClaimCreditsView,
    CloseView,
    DrawView,
    GiveawayViewSet,
    MyPicksView,
    PickView,
    RecalculateDrawView,
    SlotView,
    StatsView,
    WinnerViewSet,
)

router = routers.DefaultRouter()
router.register('member', MemberViewSet)
router.register('credits', CreditLedgerViewSet)
router.register('giveaway/winners', WinnerViewSet)
router.register('giveaway', GiveawayViewSet)

app_name = 'api'
urlpatterns = [
    path('member/me', LoggedInView.as_view()),
    path('member/<int:pk>/credits', MemberCreditsView.as_view()),
    path('giveaway/<int:pk>/pick', PickView.as_view()),
    path('giveaway/<int:pk>/bulk-pick', BulkPickView.as_view()),
    path('giveaway/<int:pk>/auto-pick', AutoPickView.as_view()),
    path('giveaway/<int:pk>/slot/<int:slot>', SlotView.as_view()),
    path('giveaway/<int:pk>/my-picks', MyPicksView.as_view()),
    path('giveaway/<int:pk>/claim-credits', ClaimCreditsView.as_view()),
    path('giveaway/<int:pk>/close', CloseView.as_view()),
    path('giveaway/<int:pk>/recalculate-draw', RecalculateDrawView.as_view()),
    path('giveaway/<int:pk>/draw', DrawView.as_view()),
    path('giveaway/<int:pk>/cancel', CancelView.as_view()),
    path('giveaway/<int:pk>/stats', StatsView.as_view()),
    path('', include(router.urls)),
]
