from django.urls import path

from .views import (
    CreateOfflineDonationView,
    DonationProofView,
    MyDonationsView,
    PayPalCaptureView,
    PayPalCreateOrderView,
    ReceiverDonationApproveView,
    ReceiverDonationListView,
    ReceiverDonationRejectView,
    SubmitOfflineDonationView,
)

urlpatterns = [
    # Donor
    path("donations/mine/", MyDonationsView.as_view(), name="donations-mine"),
    path("donations/projects/<int:pk>/submit-offline/", SubmitOfflineDonationView.as_view(), name="donation-submit-offline"),
    path("donations/projects/<int:pk>/create-offline/", CreateOfflineDonationView.as_view(), name="donation-create-offline"),
    path("donations/projects/<int:pk>/paypal/create-order/", PayPalCreateOrderView.as_view(), name="donation-paypal-create"),
    path("donations/paypal/capture/", PayPalCaptureView.as_view(), name="donation-paypal-capture"),
    path("donations/<int:pk>/proof/", DonationProofView.as_view(), name="donation-proof"),

    # Receiver
    path("receiver/donations/", ReceiverDonationListView.as_view(), name="receiver-donations"),
    path("receiver/donations/<int:pk>/approve/", ReceiverDonationApproveView.as_view(), name="receiver-donation-approve"),
    path("receiver/donations/<int:pk>/reject/", ReceiverDonationRejectView.as_view(), name="receiver-donation-reject"),
]
