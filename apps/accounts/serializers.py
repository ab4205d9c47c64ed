from rest_framework import serializers

from .models import CustomUser


class UserSerializer(serializers.ModelSerializer):
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = CustomUser
        fields = ('id', 'email', 'display_name', 'date_joined')
        read_only_fields = fields


class RequestCodeSerializer(serializers.Serializer):
    # Format checks happen in the identifier normalizer
    email = serializers.CharField(max_length=254)


class VerifyCodeSerializer(serializers.Serializer):
    email = serializers.CharField(max_length=254)
    code = serializers.CharField(max_length=12)


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class IssueResultSerializer(serializers.Serializer):
    issued = serializers.BooleanField()
    delivery_failed = serializers.BooleanField()
    reason = serializers.CharField(required=False)
    retry_after_seconds = serializers.IntegerField(required=False)


class LoginResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    reason = serializers.CharField(required=False)
    attempts_remaining = serializers.IntegerField(required=False)
    token = serializers.CharField(required=False)
    refresh = serializers.CharField(required=False)
    user = UserSerializer(required=False)
