from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from . import registration

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    created_at = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model = User
        fields = ("id", "public_key", "username", "email", "created_at", "updated_at")
        read_only_fields = fields


class TrimmedTextField(serializers.CharField):
    """Trimmed string; any other JSON type counts as absent."""

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_blank", True)
        kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if not isinstance(data, str):
            return None
        return super().to_internal_value(data)


class RegistrationSerializer(serializers.Serializer):
    """
    Validate a wallet sign-up. The first failure wins and is raised as its own
    registration error (``MissingField``, ``InvalidPublicKey``, ``WalletTaken``...).

    Order: required fields, key format and checksum, username, email, then
    the wallet, username and email availability checks.
    """

    public_key = TrimmedTextField()
    username = TrimmedTextField()
    email = TrimmedTextField()

    def validate(self, attrs: dict) -> dict:
        public_key = attrs.get("public_key") or None
        username = attrs.get("username") or None
        email = (attrs.get("email") or "").lower() or None

        if not public_key:
            raise registration.MissingField("public_key is required")
        if not username:
            raise registration.MissingField("username is required")

        registration.check_public_key(public_key)
        registration.check_username(username)
        if email is not None:
            registration.check_email(email)

        registration.check_availability(public_key=public_key, username=username, email=email)
        return {"public_key": public_key, "username": username, "email": email}

    def create(self, validated_data: dict):
        return registration.create_user(**validated_data)
