from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsPlatformUser
from apps.admins.permissions import IsPlatformAdmin

from .serializers import (
    CoinBalanceSerializer,
    CoinTransactionSerializer,
    AdminCoinTransactionSerializer,
    EarnRequestSerializer,
    RedeemRequestSerializer,
    AdminNotesSerializer,
    ProcessPaymentSerializer,
    WelcomeBonusRequestSerializer,
    AdjustmentSerializer,
    TransactionFilterSerializer,
    PendingFilterSerializer,
    DateRangeSerializer,
    BalanceSummarySerializer,
    WelcomeBonusResponseSerializer,
    TransactionStatsSerializer,
    PaymentStatsSerializer,
    PaymentSummarySerializer,
)
from .services import (
    create_earn_request,
    create_redeem_request,
    get_or_create_balance,
    get_balance_summary,
    get_transaction_history,
    get_user_transaction,
    get_coin_user,
    create_welcome_bonus,
    is_eligible_for_welcome_bonus,
    welcome_bonus_amount,
    approve_earn,
    reject_earn,
    approve_redeem,
    reject_redeem,
    list_transactions,
    list_pending_transactions,
    process_payment,
    get_payment_summary,
    get_payment_stats,
    list_paid_transactions,
    adjust_balance,
    get_transaction_stats,
)


UUID_PATTERN = r'[0-9a-fA-F-]{36}'


class CoinPagination(PageNumberPagination):
    """Custom pagination for coin transactions."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def paginated(request, queryset, serializer_class):
    paginator = CoinPagination()
    page = paginator.paginate_queryset(queryset, request)
    return paginator.get_paginated_response(serializer_class(page, many=True).data)


# =============================================================================
# User endpoints
# =============================================================================

@extend_schema(
    request=EarnRequestSerializer,
    responses={201: CoinTransactionSerializer},
    description="Submit a bill to earn coins. The request waits for admin approval.",
    tags=['coins'],
)
@api_view(['POST'])
@permission_classes([IsPlatformUser])
def earn_request(request):
    """Create an earn request."""
    serializer = EarnRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    earn = create_earn_request(user=request.user, **serializer.validated_data)
    return Response(CoinTransactionSerializer(earn).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=RedeemRequestSerializer,
    responses={201: CoinTransactionSerializer},
    description="Ask to spend coins against a bill. Coins are deducted on approval.",
    tags=['coins'],
)
@api_view(['POST'])
@permission_classes([IsPlatformUser])
def redeem_request(request):
    """Create a redeem request."""
    serializer = RedeemRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    redeem = create_redeem_request(user=request.user, **serializer.validated_data)
    return Response(CoinTransactionSerializer(redeem).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: CoinTransactionSerializer(many=True)},
    description="Current user's transactions, newest first.",
    tags=['coins'],
)
@api_view(['GET'])
@permission_classes([IsPlatformUser])
def my_transactions(request):
    return paginated(request, get_transaction_history(user=request.user), CoinTransactionSerializer)


@extend_schema(responses={200: CoinTransactionSerializer}, tags=['coins'])
@api_view(['GET'])
@permission_classes([IsPlatformUser])
def transaction_detail(request, transaction_id):
    """One of the current user's transactions."""
    coin_transaction = get_user_transaction(user=request.user, transaction_id=transaction_id)
    return Response(CoinTransactionSerializer(coin_transaction).data)


@extend_schema(responses={200: CoinBalanceSerializer}, tags=['coins'])
@api_view(['GET'])
@permission_classes([IsPlatformUser])
def my_balance(request):
    return Response(CoinBalanceSerializer(get_or_create_balance(request.user)).data)


@extend_schema(responses={200: BalanceSummarySerializer}, tags=['coins'])
@api_view(['GET'])
@permission_classes([IsPlatformUser])
def my_summary(request):
    return Response(BalanceSummarySerializer(get_balance_summary(request.user)).data)


@extend_schema(
    methods=['GET'],
    responses={200: None},
    description="Whether the current user can still claim the welcome bonus.",
    tags=['coins'],
)
@extend_schema(
    methods=['POST'],
    request=None,
    responses={201: WelcomeBonusResponseSerializer},
    description="Claim the one-time welcome bonus.",
    tags=['coins'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsPlatformUser])
def my_welcome_bonus(request):
    if request.method == 'GET':
        return Response({
            'eligible': is_eligible_for_welcome_bonus(request.user),
            'amount': welcome_bonus_amount(),
        })

    result = create_welcome_bonus(user_id=request.user.id)
    return Response(WelcomeBonusResponseSerializer(result).data, status=status.HTTP_201_CREATED)


# =============================================================================
# Admin endpoints
# =============================================================================

@extend_schema(
    request=WelcomeBonusRequestSerializer,
    responses={201: WelcomeBonusResponseSerializer},
    description="Grant the welcome bonus to a user.",
    tags=['admin-coins'],
)
@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def admin_welcome_bonus(request):
    serializer = WelcomeBonusRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = create_welcome_bonus(**serializer.validated_data)
    return Response(WelcomeBonusResponseSerializer(result).data, status=status.HTTP_201_CREATED)


@extend_schema(responses={200: CoinBalanceSerializer}, tags=['admin-coins'])
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def user_balance(request, user_id):
    user = get_coin_user(user_id=user_id)
    return Response(CoinBalanceSerializer(get_or_create_balance(user)).data)


@extend_schema(responses={200: BalanceSummarySerializer}, tags=['admin-coins'])
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def user_summary(request, user_id):
    user = get_coin_user(user_id=user_id)
    return Response(BalanceSummarySerializer(get_balance_summary(user)).data)


@extend_schema(
    request=AdjustmentSerializer,
    responses={201: AdminCoinTransactionSerializer},
    description="Add or remove coins manually. The balance may not go negative.",
    tags=['admin-coins'],
)
@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def adjustments(request):
    serializer = AdjustmentSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    adjustment = adjust_balance(**serializer.validated_data)
    return Response(AdminCoinTransactionSerializer(adjustment).data, status=status.HTTP_201_CREATED)


@extend_schema(responses={200: TransactionStatsSerializer}, tags=['admin-coins'])
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def transaction_stats(request):
    return Response(TransactionStatsSerializer(get_transaction_stats()).data)


@extend_schema(
    parameters=[
        OpenApiParameter(name='start_date', type=str, required=False, description='YYYY-MM-DD'),
        OpenApiParameter(name='end_date', type=str, required=False, description='YYYY-MM-DD'),
    ],
    responses={200: PaymentStatsSerializer},
    tags=['admin-coins'],
)
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def payment_stats(request):
    filters = DateRangeSerializer(data=request.query_params)
    filters.is_valid(raise_exception=True)
    return Response(PaymentStatsSerializer(get_payment_stats(**filters.validated_data)).data)


@extend_schema(
    parameters=[
        OpenApiParameter(name='start_date', type=str, required=False, description='YYYY-MM-DD'),
        OpenApiParameter(name='end_date', type=str, required=False, description='YYYY-MM-DD'),
    ],
    responses={200: AdminCoinTransactionSerializer(many=True)},
    description="Paid redemptions, most recently paid first.",
    tags=['admin-coins'],
)
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def paid_transactions(request):
    filters = DateRangeSerializer(data=request.query_params)
    filters.is_valid(raise_exception=True)
    return paginated(
        request,
        list_paid_transactions(**filters.validated_data),
        AdminCoinTransactionSerializer,
    )


@extend_schema(responses={200: PaymentSummarySerializer}, tags=['admin-coins'])
@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def payment_summary(request, transaction_id):
    return Response(PaymentSummarySerializer(get_payment_summary(transaction_id=transaction_id)).data)


class AdminTransactionViewSet(viewsets.GenericViewSet):
    """
    Admin review of coin transactions.

    list: All transactions (filters: type, status, user_id, brand_id)
    pending: Review queue, oldest first (filter: type)
    approve / reject: Earn requests
    approve_redeem / reject_redeem: Redeem requests
    process_payment: Pay out a processed redemption
    """

    serializer_class = AdminCoinTransactionSerializer
    permission_classes = [IsPlatformAdmin]
    pagination_class = CoinPagination
    lookup_value_regex = UUID_PATTERN

    def _respond(self, coin_transaction):
        return Response(AdminCoinTransactionSerializer(coin_transaction).data)

    def _admin_notes(self, request):
        serializer = AdminNotesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data.get('admin_notes')

    @extend_schema(
        parameters=[
            OpenApiParameter(name='type', type=str, required=False),
            OpenApiParameter(name='status', type=str, required=False),
            OpenApiParameter(name='user_id', type=str, required=False),
            OpenApiParameter(name='brand_id', type=str, required=False),
        ],
        responses={200: AdminCoinTransactionSerializer(many=True)},
        tags=['admin-coins'],
    )
    def list(self, request):
        filters = TransactionFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        page = self.paginate_queryset(list_transactions(**filters.validated_data))
        return self.get_paginated_response(AdminCoinTransactionSerializer(page, many=True).data)

    @extend_schema(
        parameters=[OpenApiParameter(name='type', type=str, required=False, enum=['EARN', 'REDEEM'])],
        responses={200: AdminCoinTransactionSerializer(many=True)},
        tags=['admin-coins'],
    )
    @action(detail=False, methods=['get'])
    def pending(self, request):
        filters = PendingFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        page = self.paginate_queryset(list_pending_transactions(**filters.validated_data))
        return self.get_paginated_response(AdminCoinTransactionSerializer(page, many=True).data)

    @extend_schema(request=AdminNotesSerializer, responses={200: AdminCoinTransactionSerializer}, tags=['admin-coins'])
    @action(detail=True, methods=['put'])
    def approve(self, request, pk=None):
        """Approve an earn request."""
        return self._respond(approve_earn(transaction_id=pk, admin_notes=self._admin_notes(request)))

    @extend_schema(request=AdminNotesSerializer, responses={200: AdminCoinTransactionSerializer}, tags=['admin-coins'])
    @action(detail=True, methods=['put'])
    def reject(self, request, pk=None):
        """Reject an earn request (notes required)."""
        return self._respond(reject_earn(transaction_id=pk, admin_notes=self._admin_notes(request)))

    @extend_schema(request=AdminNotesSerializer, responses={200: AdminCoinTransactionSerializer}, tags=['admin-coins'])
    @action(detail=True, methods=['put'], url_path='approve-redeem')
    def approve_redeem(self, request, pk=None):
        """Approve a redeem request."""
        return self._respond(approve_redeem(transaction_id=pk, admin_notes=self._admin_notes(request)))

    @extend_schema(request=AdminNotesSerializer, responses={200: AdminCoinTransactionSerializer}, tags=['admin-coins'])
    @action(detail=True, methods=['put'], url_path='reject-redeem')
    def reject_redeem(self, request, pk=None):
        """Reject a redeem request (notes required)."""
        return self._respond(reject_redeem(transaction_id=pk, admin_notes=self._admin_notes(request)))

    @extend_schema(request=ProcessPaymentSerializer, responses={200: AdminCoinTransactionSerializer}, tags=['admin-coins'])
    @action(detail=True, methods=['put'], url_path='process-payment')
    def process_payment(self, request, pk=None):
        """Record the payout of a processed redemption."""
        serializer = ProcessPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._respond(process_payment(transaction_id=pk, **serializer.validated_data))
