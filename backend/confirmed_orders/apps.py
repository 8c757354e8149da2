from django.apps import AppConfig


class ConfirmedOrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "confirmed_orders"
    verbose_name = "Confirmed orders"
