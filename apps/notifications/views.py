from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsPlatformUser

from .serializers import (
    NotificationSerializer,
    NotificationFilterSerializer,
    UnreadCountSerializer,
)
from .services import (
    list_notifications,
    mark_as_read,
    mark_all_as_read,
    unread_count,
    delete_notification,
    NotificationNotFoundError,
)


UUID_PATTERN = r'[0-9a-fA-F-]{36}'


class NotificationPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class NotificationViewSet(viewsets.GenericViewSet):
    """
    The current user's notifications.

    list: Notifications, newest first (filters: unread_only, type)
    unread_count: Number of unread notifications
    read: Mark one notification as read
    read_all: Mark every notification as read
    destroy: Delete a notification
    """

    serializer_class = NotificationSerializer
    permission_classes = [IsPlatformUser]
    pagination_class = NotificationPagination
    lookup_value_regex = UUID_PATTERN

    @extend_schema(
        parameters=[
            OpenApiParameter(name='unread_only', type=bool, required=False),
            OpenApiParameter(name='type', type=str, required=False),
        ],
        responses={200: NotificationSerializer(many=True)},
        tags=['notifications'],
    )
    def list(self, request):
        filters = NotificationFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        queryset = list_notifications(user=request.user, **filters.validated_data)
        page = self.paginate_queryset(queryset)
        return self.get_paginated_response(NotificationSerializer(page, many=True).data)

    @extend_schema(responses={200: UnreadCountSerializer}, tags=['notifications'])
    @action(detail=False, methods=['get'], url_path='unread-count')
    def unread_count(self, request):
        return Response({'unread_count': unread_count(user=request.user)})

    @extend_schema(request=None, responses={200: NotificationSerializer}, tags=['notifications'])
    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        """Mark a notification as read."""
        try:
            notification = mark_as_read(user=request.user, notification_id=pk)
        except NotificationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(NotificationSerializer(notification).data)

    @extend_schema(request=None, tags=['notifications'])
    @action(detail=False, methods=['post'], url_path='read-all')
    def read_all(self, request):
        """Mark all notifications as read."""
        updated = mark_all_as_read(user=request.user)
        return Response({'message': 'All notifications marked as read', 'updated': updated})

    @extend_schema(responses={204: None}, tags=['notifications'])
    def destroy(self, request, pk=None):
        try:
            delete_notification(user=request.user, notification_id=pk)
        except NotificationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
