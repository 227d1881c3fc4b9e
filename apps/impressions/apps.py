from django.apps import AppConfig


class ImpressionsConfig(AppConfig):
    name = 'apps.impressions'
    label = 'impressions'
    verbose_name = 'Ad impressions'
