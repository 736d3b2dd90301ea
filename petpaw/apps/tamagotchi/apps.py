from django.apps import AppConfig


class TamagotchiConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.tamagotchi"
