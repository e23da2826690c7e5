"""
Serializers for the Bills app.
Accepts the bill shape stored by the receipt scanner; output uses
camelCase to match the mobile client.
"""
from rest_framework import serializers

from apps.bills.services.bill import round_money
from apps.currencies.serializers import ConversionRequestSerializer


# Amounts keep the precision they were scanned with; rounding happens on output.
def money_field(**kwargs):
    return serializers.DecimalField(max_digits=None, decimal_places=None, **kwargs)


class BillItemSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, allow_blank=True)
    price = money_field()


class BillSerializer(serializers.Serializer):
    restaurant = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    subtotal = money_field(min_value=0)
    tax = money_field(min_value=0, default=0)
    tip = money_field(min_value=0, default=0)
    total = money_field(required=False, allow_null=True)
    items = BillItemSerializer(many=True)
    currency_symbol = serializers.CharField(max_length=8, required=False, allow_blank=True, default='')
    currencySymbol = serializers.CharField(max_length=8, required=False, allow_blank=True, write_only=True)


class GuestAssignmentSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    items = serializers.ListField(child=serializers.IntegerField(min_value=0), allow_empty=True)


class SplitRequestSerializer(serializers.Serializer):
    """
    A bill plus the guests who ordered each item.

    Every item must be claimed by exactly one guest, and guest names must
    be unique.
    """
    bill = BillSerializer()
    guests = GuestAssignmentSerializer(many=True, allow_empty=False)
    conversion = ConversionRequestSerializer(required=False, allow_null=True)
    venmoUsername = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        item_count = len(attrs['bill']['items'])
        names = [guest['name'] for guest in attrs['guests']]
        if len(set(names)) != len(names):
            raise serializers.ValidationError({'guests': 'Guest names must be unique.'})

        owners = {}
        for guest in attrs['guests']:
            for index in guest['items']:
                if index >= item_count:
                    raise serializers.ValidationError(
                        {'guests': f'Item {index} does not exist on this bill.'}
                    )
                if index in owners:
                    raise serializers.ValidationError(
                        {'guests': f'Item {index} is assigned to both {owners[index]} and {guest["name"]}.'}
                    )
                owners[index] = guest['name']

        unassigned = [index for index in range(item_count) if index not in owners]
        if unassigned:
            raise serializers.ValidationError(
                {'guests': f'Items {unassigned} are not assigned to any guest.'}
            )

        attrs['assignment'] = owners
        return attrs


class GuestItemSerializer(serializers.Serializer):
    name = serializers.CharField()
    price = serializers.SerializerMethodField()

    def get_price(self, obj):
        return str(round_money(obj.price))


class GuestSerializer(serializers.Serializer):
    """Read-only view of an allocated ``Guest``, amounts rounded to cents."""
    name = serializers.CharField()
    items = GuestItemSerializer(many=True)
    subtotal = serializers.SerializerMethodField()
    tax = serializers.SerializerMethodField()
    tip = serializers.SerializerMethodField()
    total = serializers.SerializerMethodField()
    convertedTotal = serializers.SerializerMethodField()

    def _money(self, amount):
        return str(round_money(amount))

    def get_subtotal(self, obj):
        return self._money(obj.subtotal)

    def get_tax(self, obj):
        return self._money(obj.tax)

    def get_tip(self, obj):
        return self._money(obj.tip)

    def get_total(self, obj):
        return self._money(obj.total)

    def get_convertedTotal(self, obj):
        conversion = self.context.get('conversion')
        if conversion is None or not conversion.is_active:
            return None
        return self._money(obj.converted_total(conversion.rate))
