from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied

from .models import (
    REGISTRATION_PENDING,
    ROLE_CHOICES,
    ROLE_DONOR,
    ROLE_FIELD,
    ROLE_RECEIVER,
    PortalCredential,
    User,
)
from .tokens import tokens_for_portal_credential, tokens_for_user

# receivers and field workers must give their full identity when registering
PROFILE_FIELDS = ("name", "father_name", "cnic", "address", "phone")


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "role",
            "name",
            "father_name",
            "phone",
            "city",
            "address",
            "cnic",
            "photo_path",
            "registration_status",
            "is_active",
            "created_at",
        ]
        read_only_fields = fields


# ---------- Registration ----------
class RegisterSerializer(serializers.Serializer):
    role = serializers.ChoiceField(
        choices=[(ROLE_DONOR, "Donor"), (ROLE_RECEIVER, "Receiver"), (ROLE_FIELD, "Field Worker")]
    )
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6, style={"input_type": "password"})

    name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    father_name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    cnic = serializers.CharField(required=False, allow_blank=True, max_length=32)
    address = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)

    def validate_email(self, value):
        return value.lower().strip()

    def validate(self, data):
        if data["role"] in (ROLE_RECEIVER, ROLE_FIELD):
            for field in PROFILE_FIELDS:
                if not data.get(field):
                    raise serializers.ValidationError({field: "This field is required."})
        return data

    def create(self, validated_data):
        role = validated_data.pop("role")
        password = validated_data.pop("password")
        email = validated_data.pop("email")

        extra = {"role": role}
        if role == ROLE_DONOR:
            extra["name"] = validated_data.get("name", "")
        else:
            extra.update({field: validated_data[field] for field in PROFILE_FIELDS})
            extra["registration_status"] = REGISTRATION_PENDING

        return User.objects.create_user(email, password, **extra)


# ---------- Login ----------
class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate(self, data):
        email = data["email"].lower().strip()
        user = User.objects.filter(email=email).first()

        if user is None:
            raise AuthenticationFailed("Invalid credentials")
        if not user.is_active:
            raise PermissionDenied("Account disabled")
        if not user.check_password(data["password"]):
            raise AuthenticationFailed("Invalid credentials")

        return {
            **tokens_for_user(user),
            "user": UserSerializer(user).data,
        }


class DonorProfileSerializer(serializers.ModelSerializer):
    """
    Partial donor profile update. A blank name is ignored, other fields
    may be cleared.
    """

    class Meta:
        model = User
        fields = ["name", "phone", "city", "address", "cnic"]
        extra_kwargs = {
            "name": {"required": False, "allow_blank": True},
            "phone": {"required": False, "allow_blank": True},
            "city": {"required": False, "allow_blank": True},
            "address": {"required": False, "allow_blank": True},
            "cnic": {"required": False, "allow_blank": True},
        }

    def validate(self, data):
        if "name" in data and not data["name"]:
            data.pop("name")
        return data


# ---------- Portal credentials ----------
class PortalLoginSerializer(serializers.Serializer):
    portal_key = serializers.ChoiceField(choices=ROLE_CHOICES)
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True)

    def validate(self, data):
        credential = PortalCredential.objects.filter(
            portal_key=data["portal_key"],
            username=data["username"].strip(),
        ).first()

        if credential is None or not credential.check_password(data["password"]):
            raise AuthenticationFailed("Invalid credentials")
        if not credential.is_active:
            raise PermissionDenied("Account disabled")

        return {
            **tokens_for_portal_credential(credential),
            "portal": {
                "id": credential.id,
                "portal_key": credential.portal_key,
                "username": credential.username,
            },
        }


class PortalCredentialSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=6)

    class Meta:
        model = PortalCredential
        fields = ["id", "portal_key", "username", "password", "is_active", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_username(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("This field may not be blank.")
        return value

    def validate(self, data):
        portal_key = data.get("portal_key", getattr(self.instance, "portal_key", None))
        username = data.get("username", getattr(self.instance, "username", None))

        taken = PortalCredential.objects.filter(portal_key=portal_key, username=username)
        if self.instance is not None:
            taken = taken.exclude(pk=self.instance.pk)
        if taken.exists():
            raise serializers.ValidationError({"username": "Username already exists for this portal"})
        return data

    def create(self, validated_data):
        password = validated_data.pop("password")
        credential = PortalCredential(**validated_data)
        credential.set_password(password)
        credential.save()
        return credential

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance
