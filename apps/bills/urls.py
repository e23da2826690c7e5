"""
URL configuration for the Bills app.
"""
from django.urls import path

from apps.bills.views import SplitBillView

app_name = 'bills'

urlpatterns = [
    path('split/', SplitBillView.as_view(), name='bill-split'),
]
