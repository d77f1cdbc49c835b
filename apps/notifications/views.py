from datetime import timezone as dt_timezone

from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.users.permissions import HasUserAccount

from .models import Notification
from .serializers import MarkReadSerializer, NotificationSerializer

DEFAULT_LIMIT = 50
MAX_LIMIT = 100


def parse_limit(raw):
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_LIMIT
    return min(max(limit, 1), MAX_LIMIT)


def parse_before(raw):
    if not raw:
        return None
    try:
        before = parse_datetime(raw)
    except ValueError:
        return None
    if before is not None and timezone.is_naive(before):
        before = timezone.make_aware(before, dt_timezone.utc)
    return before


class MyNotificationsView(APIView):
    """
    Newest first. `limit` is clamped to 1..100; `before` pages back in time.
    """
    permission_classes = [IsAuthenticated, HasUserAccount]

    def get(self, request):
        queryset = Notification.objects.filter(recipient=request.user)

        before = parse_before(request.query_params.get("before"))
        if before is not None:
            queryset = queryset.filter(created_at__lt=before)

        limit = parse_limit(request.query_params.get("limit"))
        serializer = NotificationSerializer(queryset[:limit], many=True)
        return Response({"notifications": serializer.data})


class UnreadCountView(APIView):
    permission_classes = [IsAuthenticated, HasUserAccount]

    def get(self, request):
        count = Notification.objects.filter(recipient=request.user, read_at__isnull=True).count()
        return Response({"unread_count": count})


class MarkReadView(APIView):
    permission_classes = [IsAuthenticated, HasUserAccount]

    def post(self, request):
        serializer = MarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated = Notification.objects.filter(
            pk__in=serializer.validated_data["ids"],
            recipient=request.user,
            read_at__isnull=True,
        ).update(read_at=timezone.now())

        return Response({"updated": updated}, status=status.HTTP_200_OK)
