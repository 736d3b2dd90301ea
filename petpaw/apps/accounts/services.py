import logging

from django.contrib.auth import authenticate
from django.db import transaction
from rest_framework.authtoken.models import Token
from rest_framework.exceptions import AuthenticationFailed

logger = logging.getLogger(__name__)


def login(username, password, request=None):
    """Authenticate credentials and return (user, token key)"""
    user = authenticate(request, username=username, password=password)
    if user is None or not user.is_active:
        logger.info(f"Failed login attempt for {username}")
        raise AuthenticationFailed("Invalid username or password.")
    token, _ = Token.objects.get_or_create(user=user)
    return user, token.key


def token_response(token_key, **identity):
    return {"access_token": token_key, "token_type": "bearer", **identity}


@transaction.atomic
def set_default_address(address):
    address.user.addresses.exclude(pk=address.pk).update(is_default=False)
    if not address.is_default:
        address.is_default = True
        address.save(update_fields=["is_default", "updated_at"])
    return address
