from .services.home_media import load_banner
from .services.settings_gateway import SettingsGateway


def announcement_banner(request):
    """
    Контекстный процессор для объявления в шапке сайта
    """
    banner = load_banner(SettingsGateway())
    return {
        'banner_enabled': banner.visible,
        'banner_text': banner.text,
    }
