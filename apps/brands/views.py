from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.admins.permissions import IsPlatformAdmin

from .models import Brand, BrandCategory
from .serializers import (
    BrandSerializer,
    BrandWriteSerializer,
    BrandSearchSerializer,
    BrandListResponseSerializer,
    BrandCategorySerializer,
    BrandCategoryWriteSerializer,
)
from .services import (
    create_brand,
    get_brand,
    update_brand,
    toggle_brand_status,
    delete_brand,
    search_brands,
    get_active_brands,
    get_brands_by_category,
    create_category,
    list_categories,
    get_category,
    update_category,
    delete_category,
    # Exceptions
    BrandsServiceError,
    BrandNotFoundError,
    CategoryNotFoundError,
    DuplicateBrandError,
    DuplicateCategoryError,
)


UUID_PATTERN = r'[0-9a-fA-F-]{36}'


def error_response(exc: BrandsServiceError) -> Response:
    if isinstance(exc, (BrandNotFoundError, CategoryNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (DuplicateBrandError, DuplicateCategoryError)):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(exc)}, status=code)


class BrandViewSet(viewsets.GenericViewSet):
    """
    ViewSet for partner brands.

    Reads are public. Writes require a platform admin.

    list: Search brands (query, category_id, is_active, page, limit)
    create: Create a brand
    retrieve: Get a brand
    partial_update: Update a brand
    destroy: Delete a brand without transactions
    """

    queryset = Brand.objects.select_related('category')
    serializer_class = BrandSerializer
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['create', 'partial_update', 'destroy', 'toggle_status']:
            return [IsPlatformAdmin()]
        return [AllowAny()]

    @extend_schema(
        parameters=[BrandSearchSerializer],
        responses={200: BrandListResponseSerializer},
        tags=['brands'],
    )
    def list(self, request):
        """Search brands."""
        params = BrandSearchSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        result = search_brands(**params.validated_data)
        result['brands'] = BrandSerializer(result['brands'], many=True).data
        return Response(result)

    @extend_schema(responses={200: BrandSerializer}, tags=['brands'])
    def retrieve(self, request, pk=None):
        """Get a brand."""
        try:
            brand = get_brand(brand_id=pk)
        except BrandsServiceError as e:
            return error_response(e)

        return Response(BrandSerializer(brand).data)

    @extend_schema(request=BrandWriteSerializer, responses={201: BrandSerializer}, tags=['brands'])
    def create(self, request):
        """Create a brand."""
        serializer = BrandWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            brand = create_brand(**serializer.validated_data)
        except BrandsServiceError as e:
            return error_response(e)

        return Response(BrandSerializer(brand).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=BrandWriteSerializer, responses={200: BrandSerializer}, tags=['brands'])
    def partial_update(self, request, pk=None):
        """Update a brand."""
        serializer = BrandWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            brand = update_brand(brand_id=pk, data=serializer.validated_data)
        except BrandsServiceError as e:
            return error_response(e)

        return Response(BrandSerializer(brand).data)

    @extend_schema(responses={204: None}, tags=['brands'])
    def destroy(self, request, pk=None):
        """Delete a brand."""
        try:
            delete_brand(brand_id=pk)
        except BrandsServiceError as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: BrandSerializer(many=True)}, tags=['brands'])
    @action(detail=False, methods=['get'])
    def active(self, request):
        """List active brands."""
        return Response(BrandSerializer(get_active_brands(), many=True).data)

    @extend_schema(
        parameters=[OpenApiParameter('category_id', str, OpenApiParameter.PATH)],
        responses={200: BrandSerializer(many=True)},
        tags=['brands'],
    )
    @action(detail=False, methods=['get'], url_path=rf'category/(?P<category_id>{UUID_PATTERN})')
    def by_category(self, request, category_id=None):
        """List active brands in a category."""
        brands = get_brands_by_category(category_id=category_id)
        return Response(BrandSerializer(brands, many=True).data)

    @extend_schema(request=None, responses={200: BrandSerializer}, tags=['brands'])
    @action(detail=True, methods=['patch'], url_path='toggle-status')
    def toggle_status(self, request, pk=None):
        """Toggle a brand's active flag."""
        try:
            brand = toggle_brand_status(brand_id=pk)
        except BrandsServiceError as e:
            return error_response(e)

        return Response(BrandSerializer(brand).data)


class BrandCategoryViewSet(viewsets.GenericViewSet):
    """
    ViewSet for brand categories.

    Reads are public. Writes require a platform admin.
    """

    queryset = BrandCategory.objects.all()
    serializer_class = BrandCategorySerializer
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['create', 'partial_update', 'destroy']:
            return [IsPlatformAdmin()]
        return [AllowAny()]

    @extend_schema(responses={200: BrandCategorySerializer(many=True)}, tags=['brand-categories'])
    def list(self, request):
        """List categories ordered by name."""
        return Response(BrandCategorySerializer(list_categories(), many=True).data)

    @extend_schema(responses={200: BrandCategorySerializer}, tags=['brand-categories'])
    def retrieve(self, request, pk=None):
        """Get a category."""
        try:
            category = get_category(category_id=pk)
        except BrandsServiceError as e:
            return error_response(e)

        return Response(BrandCategorySerializer(category).data)

    @extend_schema(
        request=BrandCategoryWriteSerializer,
        responses={201: BrandCategorySerializer},
        tags=['brand-categories'],
    )
    def create(self, request):
        """Create a category."""
        serializer = BrandCategoryWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            category = create_category(**serializer.validated_data)
        except BrandsServiceError as e:
            return error_response(e)

        return Response(BrandCategorySerializer(category).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=BrandCategoryWriteSerializer,
        responses={200: BrandCategorySerializer},
        tags=['brand-categories'],
    )
    def partial_update(self, request, pk=None):
        """Update a category."""
        serializer = BrandCategoryWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            category = update_category(category_id=pk, data=serializer.validated_data)
        except BrandsServiceError as e:
            return error_response(e)

        return Response(BrandCategorySerializer(category).data)

    @extend_schema(responses={204: None}, tags=['brand-categories'])
    def destroy(self, request, pk=None):
        """Delete a category without brands."""
        try:
            delete_category(category_id=pk)
        except BrandsServiceError as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)
