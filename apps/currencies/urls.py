"""
URL configuration for the Currencies app.
"""
from django.urls import path

from apps.currencies.views import ConvertView, CurrencyDetailView, CurrencyListView

app_name = 'currencies'

urlpatterns = [
    # Explicit paths BEFORE the code lookup so "convert" is not read as a code
    path('convert/', ConvertView.as_view(), name='currency-convert'),
    path('', CurrencyListView.as_view(), name='currency-list'),
    path('<str:code>/', CurrencyDetailView.as_view(), name='currency-detail'),
]
