import logging

from django.contrib.auth import authenticate
from rest_framework import mixins, status, viewsets
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.exceptions import error_response

from .models import CustomUser
from .permissions import IsAdminRole
from .serializers import RegisterSerializer, UserSerializer

logger = logging.getLogger(__name__)


def _token_payload(user, token):
    return {
        'token': token.key,
        'role': user.role,
        'username': user.username,
        'name': user.display_name,
    }


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login_view(request):
    """
    Login endpoint that returns a token and user role
    """
    username = request.data.get('username')
    password = request.data.get('password')

    if not username or not password:
        return error_response('Username and password required', status.HTTP_400_BAD_REQUEST)

    user = authenticate(username=username, password=password)
    if not user:
        logger.info("Failed login for username=%s", username)
        return error_response('Invalid credentials', status.HTTP_401_UNAUTHORIZED)

    token, _ = Token.objects.get_or_create(user=user)
    return Response(_token_payload(user, token))


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def register_view(request):
    """
    Registration endpoint for customer accounts. Console roles are granted by a super admin.
    """
    ser = RegisterSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    user = ser.save()
    token = Token.objects.create(user=user)
    logger.info("Registered %s user %s", user.role, user.username)
    return Response(_token_payload(user, token), status=status.HTTP_201_CREATED)


class UserViewSet(mixins.ListModelMixin,
                  mixins.RetrieveModelMixin,
                  mixins.UpdateModelMixin,
                  mixins.DestroyModelMixin,
                  viewsets.GenericViewSet):
    """Console user management."""
    queryset = CustomUser.objects.all().order_by('-date_joined')
    serializer_class = UserSerializer
    permission_classes = [IsAdminRole]

    def get_queryset(self):
        qs = super().get_queryset()
        role = self.request.query_params.get('role')
        if role:
            qs = qs.filter(role=role)
        kyc_status = self.request.query_params.get('kyc_status')
        if kyc_status:
            qs = qs.filter(kyc_status=kyc_status)
        return qs

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        if user.pk == request.user.pk:
            return error_response('You cannot delete your own account')
        if user.is_admin_role and not request.user.is_super_admin:
            return error_response('Only a Super Admin can delete console users', status.HTTP_403_FORBIDDEN)
        user.delete()
        return Response({'detail': 'User deleted successfully'}, status=status.HTTP_200_OK)
