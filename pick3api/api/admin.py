from django.contrib import admin

from .models import Member


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ("id", "username", "email", "role", "credits")
    list_filter = ("role",)
    search_fields = ("username", "email")
    ordering = ("username",)
    readonly_fields = ("credits",)
