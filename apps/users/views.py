import logging

from django.db import transaction
from rest_framework import generics, status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated, NotFound
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cores.constants import DONOR_PHOTOS, RECEIVER_PHOTOS
from apps.cores.exceptions import Conflict
from apps.cores.uploads import store_upload

from .authentication import StatelessRoleJWTAuthentication
from .models import ROLE_DONOR, ROLE_RECEIVER, PortalCredential, User
from .permissions import HasUserAccount, IsAdmin, IsDonor
from .serializers import (
    DonorProfileSerializer,
    LoginSerializer,
    PortalCredentialSerializer,
    PortalLoginSerializer,
    RegisterSerializer,
    UserSerializer,
)
from .tokens import tokens_for_user

logger = logging.getLogger(__name__)

# field workers register without a photo
REGISTRATION_PHOTO_FOLDERS = {
    ROLE_RECEIVER: RECEIVER_PHOTOS,
    ROLE_DONOR: DONOR_PHOTOS,
}


# -------- Register --------
class RegisterView(generics.GenericAPIView):
    """
    Create a donor, receiver or field worker account.
    Receivers must upload a profile photo; receivers and field workers start
    out pending until an admin verifies them.
    """
    serializer_class = RegisterSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        email = serializer.validated_data["email"]
        if User.objects.filter(email=email).exists():
            raise Conflict("Email already in use")

        photo = request.FILES.get("photo")
        if serializer.validated_data["role"] == ROLE_RECEIVER and photo is None:
            return Response(
                {"message": "Profile picture is required"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        with transaction.atomic():
            user = serializer.save()
            folder = REGISTRATION_PHOTO_FOLDERS.get(user.role)
            if photo is not None and folder:
                user.photo_path = store_upload(photo, folder)
                user.save(update_fields=["photo_path", "updated_at"])

        logger.info("Registered %s account %s", user.role, user.id)

        return Response(
            {
                "success": True,
                "message": "User registered successfully.",
                "data": {**tokens_for_user(user), "user": UserSerializer(user).data},
            },
            status=status.HTTP_201_CREATED,
        )


# -------- Login --------
class LoginView(generics.GenericAPIView):
    """
    Login using email and password.
    Returns access and refresh JWT tokens.
    """
    serializer_class = LoginSerializer
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return Response(
            {
                "success": True,
                "message": "Login successful.",
                "data": serializer.validated_data,
            },
            status=status.HTTP_200_OK,
        )


class MeView(APIView):
    authentication_classes = [StatelessRoleJWTAuthentication]
    permission_classes = [IsAuthenticated]

    def get(self, request):
        if getattr(request.user, "is_portal", False):
            raise NotAuthenticated("Unauthorized")

        user = User.objects.filter(pk=request.user.id).first()
        if user is None:
            raise NotFound("User not found")
        if not user.is_active:
            raise AuthenticationFailed("User is inactive")

        return Response({"user": UserSerializer(user).data})


class DonorProfileView(APIView):
    permission_classes = [IsAuthenticated, IsDonor, HasUserAccount]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def put(self, request):
        user = generics.get_object_or_404(User, pk=request.user.pk)

        serializer = DonorProfileSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        photo = request.FILES.get("photo")
        with transaction.atomic():
            user = serializer.save()
            if photo is not None:
                user.photo_path = store_upload(photo, DONOR_PHOTOS)
                user.save(update_fields=["photo_path", "updated_at"])

        return Response({"user": UserSerializer(user).data})


# -------- Portal credentials --------
class PortalLoginView(generics.GenericAPIView):
    serializer_class = PortalLoginSerializer
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return Response(
            {
                "success": True,
                "message": "Login successful.",
                "data": serializer.validated_data,
            },
            status=status.HTTP_200_OK,
        )


class PortalCredentialListCreateView(generics.ListCreateAPIView):
    queryset = PortalCredential.objects.all()
    serializer_class = PortalCredentialSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    pagination_class = None
    filterset_fields = ["portal_key", "is_active"]


class PortalCredentialDetailView(generics.UpdateAPIView, generics.DestroyAPIView):
    queryset = PortalCredential.objects.all()
    serializer_class = PortalCredentialSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    http_method_names = ["put", "delete"]

    def update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)
