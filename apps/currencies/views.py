"""
Views for the Currencies app.

Provides the currency picker listing and a one-shot conversion endpoint
backed by the exchange rate service.
"""
import logging

from django.http import Http404
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.currencies.serializers import (
    ConversionRequestSerializer,
    ConversionStateSerializer,
    CurrencySerializer,
)
from apps.currencies.services.conversion_session import (
    ConversionStatus,
    FailureKind,
    run_conversion,
)
from apps.currencies.services.currency_directory import directory

logger = logging.getLogger(__name__)


class CurrencyListView(APIView):
    """
    List currencies, optionally filtered.

    GET /api/v1/currencies/?search=<query>
    """
    permission_classes = [AllowAny]

    def get(self, request):
        entries = directory.search(request.query_params.get('search', ''))
        return Response({
            'success': True,
            'data': CurrencySerializer(entries, many=True).data,
        })


class CurrencyDetailView(APIView):
    """
    GET /api/v1/currencies/<code>/
    """
    permission_classes = [AllowAny]

    def get(self, request, code):
        entry = directory.lookup(code.upper())
        if entry is None:
            raise Http404
        return Response({'success': True, 'data': CurrencySerializer(entry).data})


class ConvertView(APIView):
    """
    Fetch the exchange rate for a currency pair.

    POST /api/v1/currencies/convert/
    Body: {"originalCurrency": "USD", "targetCurrency": "EUR"}

    Missing or identical currencies are rejected with ``validation_error``.
    A failed fetch answers 503 (``network_unavailable``) or 502
    (``rate_not_found`` / ``exchange_rate_error``) with the alert to show.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = ConversionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        session = run_conversion(
            serializer.validated_data.get('originalCurrency'),
            serializer.validated_data.get('targetCurrency'),
        )
        state = session.state
        data = ConversionStateSerializer(state).data

        if state.status == ConversionStatus.FETCH_FAILED:
            if state.failure == FailureKind.OFFLINE:
                status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            else:
                status_code = status.HTTP_502_BAD_GATEWAY
            return Response(
                {
                    'success': False,
                    'error': {
                        'code': state.error_code,
                        'title': state.alert['title'],
                        'message': state.alert['message'],
                    },
                    'data': data,
                },
                status=status_code,
            )

        return Response({'success': True, 'data': data})
