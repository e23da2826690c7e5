"""
Serializers for the Currencies app.
All output uses camelCase to match the mobile client.
"""
from rest_framework import serializers

from apps.currencies.services.currency_directory import (
    directory,
    get_currency_full,
    get_currency_label,
)


class CurrencySerializer(serializers.Serializer):
    code = serializers.CharField(read_only=True)
    symbol = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    label = serializers.SerializerMethodField()
    fullLabel = serializers.SerializerMethodField()

    def get_label(self, obj):
        return get_currency_label(obj.code)

    def get_fullLabel(self, obj):
        return get_currency_full(obj.code)


class ConversionRequestSerializer(serializers.Serializer):
    """
    A currency pair to convert between.

    Both sides are optional at this level so that a missing selection is
    reported by the conversion session with its own message.
    """
    originalCurrency = serializers.CharField(max_length=8, required=False, allow_null=True, allow_blank=True)
    targetCurrency = serializers.CharField(max_length=8, required=False, allow_null=True, allow_blank=True)

    def _validate_code(self, value):
        if not value:
            return None
        value = value.upper()
        if value not in directory:
            raise serializers.ValidationError(f'{value} is not a supported currency.')
        return value

    def validate_originalCurrency(self, value):
        return self._validate_code(value)

    def validate_targetCurrency(self, value):
        return self._validate_code(value)


class ConversionStateSerializer(serializers.Serializer):
    """Read-only view of a ``ConversionState``."""
    originalCurrency = serializers.CharField(source='original_currency', allow_null=True)
    targetCurrency = serializers.CharField(source='target_currency', allow_null=True)
    rate = serializers.SerializerMethodField()
    status = serializers.SerializerMethodField()
    active = serializers.BooleanField(source='is_active')
    failure = serializers.SerializerMethodField()
    alert = serializers.DictField(allow_null=True)

    def get_rate(self, obj):
        # Full precision: rates for weak currencies can be tiny.
        return format(obj.rate, 'f')

    def get_status(self, obj):
        return obj.status.value

    def get_failure(self, obj):
        return obj.failure.value if obj.failure else None
