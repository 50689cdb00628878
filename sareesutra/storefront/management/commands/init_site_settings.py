"""
Команда для начальной инициализации настроек медиа главной страницы
"""
from django.core.management.base import BaseCommand, CommandError

from storefront.services.home_media import initialize_default_settings


class Command(BaseCommand):
    help = 'Seeds default home media slots and announcement banner settings'

    def handle(self, *args, **options):
        try:
            created = initialize_default_settings()
        except RuntimeError as exc:
            raise CommandError(str(exc)) from exc

        if created:
            self.stdout.write(self.style.SUCCESS('Settings initialized successfully'))
        else:
            self.stdout.write(self.style.WARNING('Settings already exist'))
