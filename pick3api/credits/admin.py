from django.contrib import admin

from .models import CreditClaim, CreditLedgerEntry


@admin.register(CreditLedgerEntry)
class CreditLedgerEntryAdmin(admin.ModelAdmin):
    list_display = ("id", "member", "amount", "reason", "balance_after", "actor", "created_at")
    list_filter = ("actor",)
    search_fields = ("member__username", "reason", "reference")

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(CreditClaim)
class CreditClaimAdmin(admin.ModelAdmin):
    list_display = ("id", "member", "giveaway", "credits_claimed", "created_at")
