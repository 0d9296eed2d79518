from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', RedirectView.as_view(url='/main/', permanent=False), name='home'),
    path('main/', include('main.urls')),
    path('htmx/', include('config.component_urls')),
]
