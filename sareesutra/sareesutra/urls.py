from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    # JSON API (home media, product display plans, spotlight)
    path("api/", include("storefront.api_urls")),
]
