from django.urls import path

from .views import MarkReadView, MyNotificationsView, UnreadCountView

urlpatterns = [
    path("notifications/mine/", MyNotificationsView.as_view(), name="notifications-mine"),
    path("notifications/unread-count/", UnreadCountView.as_view(), name="notifications-unread-count"),
    path("notifications/mark-read/", MarkReadView.as_view(), name="notifications-mark-read"),
]
