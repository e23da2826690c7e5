"""
Flick2Split - Root URL Configuration
"""
from django.conf import settings
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    return Response({'status': 'ok', 'service': 'flick-split-api'})


urlpatterns = [
    path('api/v1/health/', health_check, name='health-check'),
    path('api/v1/currencies/', include('apps.currencies.urls')),
    path('api/v1/bills/', include('apps.bills.urls')),
]

# API documentation
if settings.DEBUG:
    from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
    urlpatterns += [
        path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
        path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    ]
