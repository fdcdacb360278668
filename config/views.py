from django.db import connection
from django.db.utils import OperationalError
from django.http import JsonResponse


def health_check(request):
    """Liveness check; reports the database as unavailable instead of failing."""
    try:
        connection.ensure_connection()
    except OperationalError:
        return JsonResponse({'status': 'error', 'database': 'unavailable'}, status=503)
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    """JSON 404 for paths outside the API routers."""
    return JsonResponse({'error': 'Not found', 'path': request.path}, status=404)


def error_500(request):
    return JsonResponse({'error': 'Internal server error'}, status=500)
