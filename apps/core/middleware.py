# apps/core/middleware.py

from django.conf import settings

from .tenancy import get_request_context


class TenantMiddleware:
    """
    Attach the tenant context to every request

    Views decorated with org_required refuse requests without it; this
    middleware only resolves it once. In DEBUG the organization is echoed
    back in an X-Tenant response header.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.tenant = get_request_context(request)

        response = self.get_response(request)

        if settings.DEBUG and request.tenant is not None:
            response['X-Tenant'] = request.tenant.org_id

        return response
