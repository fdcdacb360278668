from rest_framework import serializers

from .models import GlobalConfig, ConfigCategory, ConfigType
from .services.global_config import parse_value


class GlobalConfigSerializer(serializers.ModelSerializer):
    """Config entry with its raw text and parsed value."""

    parsed_value = serializers.SerializerMethodField()

    class Meta:
        model = GlobalConfig
        fields = [
            'id',
            'key',
            'value',
            'parsed_value',
            'description',
            'type',
            'is_editable',
            'category',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_parsed_value(self, obj):
        try:
            return parse_value(obj.value, obj.type)
        except ValueError:
            return None


class ConfigUpdateSerializer(serializers.Serializer):
    """
    Any JSON value. Without ``type`` an existing entry keeps its declared
    type and the value is converted to it.
    """

    value = serializers.JSONField()
    type = serializers.ChoiceField(choices=ConfigType.choices, required=False)
    description = serializers.CharField(max_length=200, required=False)
    category = serializers.ChoiceField(choices=ConfigCategory.choices, required=False)
