from django.db import models
from django.utils import timezone


class Role(models.IntegerChoices):
    USER = 0, 'User'
    # Banned from giveaways
    BANNED = 1, 'Banned'
    MODERATOR = 5, 'Moderator'
    ADMIN = 9, 'Admin'


class Member(models.Model):

    class Meta:
        db_table = 'member'

    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(default=None, null=True)
    role = models.IntegerField(choices=Role.choices, default=Role.USER)
    credits = models.PositiveIntegerField(default=0)
    api_token = models.CharField(max_length=64, default=None, null=True, db_index=True)
    joined_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return self.username

    @property
    def is_authenticated(self):
        return True

    @property
    def is_operator(self):
        return self.role >= Role.ADMIN
