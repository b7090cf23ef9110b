from django.apps import AppConfig


class GiveawayConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'giveaway'
