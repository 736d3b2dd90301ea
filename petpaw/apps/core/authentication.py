from rest_framework.authentication import TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """DRF token auth reading ``Authorization: Bearer <key>``, as the mobile client sends it"""

    keyword = "Bearer"
