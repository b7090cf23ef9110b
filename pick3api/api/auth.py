from rest_framework import authentication
from rest_framework import exceptions
from .models import Member


class TokenAuthentication(authentication.BaseAuthentication):
    """
    Bearer token issued to each member. Login and token issuance live in the
    storefront, this API only resolves the token back to a member.
    """

    def authenticate(self, request):
        auth = request.headers.get('Authorization')
        if not auth:
            return None

        if not auth.startswith('Bearer '):
            return None

        token = auth.split('Bearer ')[-1]
        member = Member.objects.filter(api_token=token)
        if member.exists():
            return member[0], member[0]
        else:
            raise exceptions.AuthenticationFailed()

    def authenticate_header(self, request):
        return 'Bearer'
