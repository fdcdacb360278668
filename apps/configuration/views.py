from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, inline_serializer

from apps.admins.permissions import IsPlatformAdmin

from .serializers import GlobalConfigSerializer, ConfigUpdateSerializer
from .services import (
    get_all,
    get_by_category,
    set_value,
    transaction_config,
    brand_config,
    user_config,
    security_config,
    initialize_defaults,
    clear_cache,
    # Exceptions
    ConfigurationServiceError,
    ConfigNotEditableError,
)


def error_response(exc: ConfigurationServiceError) -> Response:
    if isinstance(exc, ConfigNotEditableError):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(exc)}, status=code)


GroupedConfigResponse = inline_serializer(
    name='GroupedConfigResponse',
    fields={'configs': serializers.DictField()},
)


@extend_schema(
    responses={200: GlobalConfigSerializer(many=True)},
    description="List every configuration entry.",
    tags=['config'],
)
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def config_list(request):
    """List all configs."""
    return Response({'configs': GlobalConfigSerializer(get_all(), many=True).data})


@extend_schema(
    responses={200: GlobalConfigSerializer(many=True)},
    description="List configuration entries in a category.",
    tags=['config'],
)
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def config_by_category(request, category):
    """List configs in a category."""
    try:
        configs = get_by_category(category)
    except ConfigurationServiceError as e:
        return error_response(e)

    return Response({'configs': GlobalConfigSerializer(configs, many=True).data})


@extend_schema(responses={200: GroupedConfigResponse}, description="Typed transaction settings.", tags=['config'])
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def transaction_configs(request):
    return Response({'configs': transaction_config()})


@extend_schema(responses={200: GroupedConfigResponse}, description="Typed brand defaults.", tags=['config'])
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def brand_configs(request):
    return Response({'configs': brand_config()})


@extend_schema(responses={200: GroupedConfigResponse}, description="Typed user settings.", tags=['config'])
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def user_configs(request):
    return Response({'configs': user_config()})


@extend_schema(responses={200: GroupedConfigResponse}, description="Typed security settings.", tags=['config'])
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def security_configs(request):
    return Response({'configs': security_config()})


@extend_schema(
    request=ConfigUpdateSerializer,
    responses={200: GlobalConfigSerializer},
    description="Create or update a configuration value. Existing entries keep their type unless `type` is given; values that don't fit the type are rejected.",
    tags=['config'],
)
@api_view(['PUT'])
@permission_classes([IsPlatformAdmin])
def config_update(request, key):
    """Update a config value."""
    serializer = ConfigUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        config = set_value(
            key,
            data['value'],
            type=data.get('type'),
            description=data.get('description'),
            category=data.get('category'),
        )
    except ConfigurationServiceError as e:
        return error_response(e)

    return Response({
        'message': f"Configuration '{key}' updated successfully",
        'config': GlobalConfigSerializer(config).data,
    })


@extend_schema(
    request=None,
    responses={200: inline_serializer('InitializeDefaultsResponse', {
        'message': serializers.CharField(),
        'created': serializers.IntegerField(),
    })},
    description="Seed default configuration entries. Existing keys are kept.",
    tags=['config'],
)
@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def config_initialize_defaults(request):
    """Seed default configs."""
    created = initialize_defaults()
    return Response({'message': 'Default configurations initialized', 'created': created})


@extend_schema(
    request=None,
    responses={200: inline_serializer('ClearCacheResponse', {'message': serializers.CharField()})},
    description="Drop cached configuration values.",
    tags=['config'],
)
@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def config_clear_cache(request):
    """Clear the config cache."""
    clear_cache()
    return Response({'message': 'Configuration cache cleared'})
