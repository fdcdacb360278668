from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import Admin
from .permissions import IsPlatformAdmin, IsSuperAdmin
from .serializers import (
    AdminSerializer,
    AdminCreateSerializer,
    AdminUpdateSerializer,
    AdminProfileUpdateSerializer,
    AdminLoginSerializer,
    AdminStatsSerializer,
    ManagedUserSerializer,
    UserStatusUpdateSerializer,
    UserStatsSerializer,
)
from .services import (
    admin_login as admin_login_service,
    issue_admin_tokens,
    create_admin,
    list_admins,
    get_admin,
    update_admin,
    update_own_profile,
    delete_admin,
    get_admin_stats,
    list_users,
    get_managed_user,
    get_user_stats,
    update_user_status,
    # Exceptions
    AdminsServiceError,
    AdminNotFoundError,
    DuplicateAdminError,
    InvalidAdminCredentialsError,
    InactiveAdminError,
    ManagedUserNotFoundError,
)


UUID_PATTERN = r'[0-9a-fA-F-]{36}'


def error_response(exc: AdminsServiceError) -> Response:
    if isinstance(exc, (AdminNotFoundError, ManagedUserNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (InvalidAdminCredentialsError, InactiveAdminError)):
        code = status.HTTP_401_UNAUTHORIZED
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(exc)}, status=code)


class AdminPagination(PageNumberPagination):
    """Custom pagination for admin listings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


# =============================================================================
# Admin authentication
# =============================================================================

@extend_schema(
    request=AdminLoginSerializer,
    responses={200: AdminSerializer},
    description="Login to the admin portal with email and password.",
    tags=['admin-auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def admin_login(request):
    """Admin login."""
    serializer = AdminLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        admin = admin_login_service(**serializer.validated_data)
    except AdminsServiceError as e:
        return error_response(e)

    return Response({
        'message': 'Login successful',
        'admin': AdminSerializer(admin).data,
        **issue_admin_tokens(admin),
    })


@extend_schema(
    request=None,
    responses={200: AdminSerializer},
    description="Verify an admin token and return the admin.",
    tags=['admin-auth'],
)
@api_view(['POST', 'GET'])
@permission_classes([IsPlatformAdmin])
def admin_verify(request):
    """Return the authenticated admin."""
    return Response({'valid': True, 'admin': AdminSerializer(request.user).data})


# =============================================================================
# Admin accounts
# =============================================================================

class AdminViewSet(viewsets.GenericViewSet):
    """
    ViewSet for portal admin accounts.

    Reading requires an admin; creating, editing and deleting
    other admins requires a super admin.
    """

    queryset = Admin.objects.all()
    serializer_class = AdminSerializer
    pagination_class = AdminPagination
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['create', 'update', 'partial_update', 'destroy']:
            return [IsSuperAdmin()]
        return [IsPlatformAdmin()]

    @extend_schema(responses={200: AdminSerializer(many=True)}, tags=['admins'])
    def list(self, request):
        """List admins, newest first."""
        page = self.paginate_queryset(list_admins())
        return self.get_paginated_response(AdminSerializer(page, many=True).data)

    @extend_schema(request=AdminCreateSerializer, responses={201: AdminSerializer}, tags=['admins'])
    def create(self, request):
        """Create an admin."""
        serializer = AdminCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            admin = create_admin(**serializer.validated_data)
        except DuplicateAdminError as e:
            return error_response(e)

        return Response(AdminSerializer(admin).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: AdminSerializer}, tags=['admins'])
    def retrieve(self, request, pk=None):
        """Get an admin."""
        try:
            admin = get_admin(admin_id=pk)
        except AdminsServiceError as e:
            return error_response(e)

        return Response(AdminSerializer(admin).data)

    @extend_schema(request=AdminUpdateSerializer, responses={200: AdminSerializer}, tags=['admins'])
    def update(self, request, pk=None):
        """Update an admin."""
        serializer = AdminUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            admin = update_admin(admin_id=pk, data=serializer.validated_data)
        except AdminsServiceError as e:
            return error_response(e)

        return Response(AdminSerializer(admin).data)

    partial_update = update

    @extend_schema(responses={204: None}, tags=['admins'])
    def destroy(self, request, pk=None):
        """Delete an admin."""
        try:
            delete_admin(admin_id=pk, deleted_by=request.user)
        except AdminsServiceError as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: AdminStatsSerializer}, tags=['admins'])
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Admin counts."""
        return Response(get_admin_stats())

    @extend_schema(
        methods=['PUT'],
        request=AdminProfileUpdateSerializer,
        responses={200: AdminSerializer},
        tags=['admins'],
    )
    @extend_schema(methods=['GET'], responses={200: AdminSerializer}, tags=['admins'])
    @action(detail=False, methods=['get', 'put'])
    def me(self, request):
        """Get or update the caller's own admin account."""
        if request.method == 'GET':
            return Response(AdminSerializer(request.user).data)

        serializer = AdminProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        admin = update_own_profile(admin=request.user, data=serializer.validated_data)
        return Response(AdminSerializer(admin).data)


# =============================================================================
# App users
# =============================================================================

class UserAdminViewSet(viewsets.GenericViewSet):
    """
    ViewSet for managing app users from the admin portal.

    list: Users with profile and balance (filters: status, search)
    retrieve: One user
    stats: User counts and coins in circulation
    status: Change account status
    """

    serializer_class = ManagedUserSerializer
    permission_classes = [IsPlatformAdmin]
    pagination_class = AdminPagination
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        return list_users(
            status=self.request.query_params.get('status'),
            search=self.request.query_params.get('search'),
        )

    @extend_schema(
        parameters=[
            OpenApiParameter('status', str, description='Filter by account status'),
            OpenApiParameter('search', str, description='Match mobile number or email'),
        ],
        responses={200: ManagedUserSerializer(many=True)},
        tags=['admin-users'],
    )
    def list(self, request):
        """List users."""
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response(ManagedUserSerializer(page, many=True).data)

    @extend_schema(responses={200: ManagedUserSerializer}, tags=['admin-users'])
    def retrieve(self, request, pk=None):
        """Get a user."""
        try:
            user = get_managed_user(user_id=pk)
        except AdminsServiceError as e:
            return error_response(e)

        return Response(ManagedUserSerializer(user).data)

    @extend_schema(responses={200: UserStatsSerializer}, tags=['admin-users'])
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """User statistics."""
        return Response(get_user_stats())

    @extend_schema(
        request=UserStatusUpdateSerializer,
        responses={200: ManagedUserSerializer},
        tags=['admin-users'],
    )
    @action(detail=True, methods=['put'], url_path='status', url_name='status')
    def set_status(self, request, pk=None):
        """Change a user's account status."""
        serializer = UserStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = update_user_status(user_id=pk, status=serializer.validated_data['status'])
        except AdminsServiceError as e:
            return error_response(e)

        return Response(ManagedUserSerializer(user).data)
