from rest_framework.authentication import TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """DRF token auth read from an ``Authorization: Bearer <key>`` header."""
    keyword = 'Bearer'
