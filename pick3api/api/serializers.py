from rest_framework import serializers

from .models import Member


class MemberSerializer(serializers.ModelSerializer):
    role_name = serializers.CharField(source='get_role_display', read_only=True)

    class Meta:
        model = Member
        fields = ['id', 'username', 'role', 'role_name', 'credits', 'joined_at']
