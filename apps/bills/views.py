"""
Views for the Bills app.
"""
import logging

from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.bills.serializers import GuestSerializer, SplitRequestSerializer
from apps.bills.services.allocation import allocate
from apps.bills.services.bill import Bill
from apps.bills.services.share import SHARE_TITLE
from apps.bills.services.summary_renderer import render_summary
from apps.currencies.serializers import ConversionStateSerializer
from apps.currencies.services.conversion_session import run_conversion

logger = logging.getLogger(__name__)


class SplitBillView(APIView):
    """
    Split a bill between guests and render the shareable summary.

    POST /api/v1/bills/split/
    Body: {
        "bill": {"restaurant", "subtotal", "tax", "tip", "total",
                 "items": [{"name", "price"}], "currency_symbol"},
        "guests": [{"name": "Alice", "items": [0, 2]}, ...],
        "conversion": {"originalCurrency": "USD", "targetCurrency": "EUR"},  // optional
        "venmoUsername": "alice"  // optional
    }

    A failed rate fetch does not fail the split: the summary is rendered
    in the bill's own currency and ``conversion.alert`` says why.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = SplitRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        bill = Bill.from_dict(data['bill'])

        guests = allocate(
            bill,
            data['assignment'],
            guest_names=[guest['name'] for guest in data['guests']],
        )

        conversion = None
        conversion_request = data.get('conversion')
        if conversion_request:
            conversion = run_conversion(
                conversion_request.get('originalCurrency'),
                conversion_request.get('targetCurrency'),
            ).state

        message = render_summary(guests, bill, conversion, data.get('venmoUsername'))
        logger.info(
            'Split %s between %d guests (conversion %s).',
            bill.restaurant or 'bill',
            len(guests),
            'active' if conversion is not None and conversion.is_active else 'off',
        )

        return Response({
            'success': True,
            'data': {
                'guests': GuestSerializer(
                    guests, many=True, context={'conversion': conversion},
                ).data,
                'conversion': ConversionStateSerializer(conversion).data if conversion else None,
                'share': {
                    'title': SHARE_TITLE,
                    'message': message,
                },
            },
        })
