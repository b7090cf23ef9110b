from django.contrib import admin

from .models import Giveaway, Pick, Winner


@admin.register(Giveaway)
class GiveawayAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "status", "total_picks", "min_participation", "draw_date")
    list_filter = ("status", "has_box_topper")
    search_fields = ("title",)
    readonly_fields = ("status", "total_picks", "pick3_result", "pick3_date")


@admin.register(Pick)
class PickAdmin(admin.ModelAdmin):
    list_display = ("id", "giveaway", "member", "slot", "pick_number", "is_free_entry", "credit_cost")
    list_filter = ("is_free_entry",)
    search_fields = ("member__username", "pick_number")


@admin.register(Winner)
class WinnerAdmin(admin.ModelAdmin):
    list_display = ("id", "giveaway", "slot", "member", "pick_number", "distance")
    ordering = ("giveaway", "slot")
