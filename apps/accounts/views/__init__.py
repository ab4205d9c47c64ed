from apps.accounts.views.auth_views import LogoutView
from apps.accounts.views.auth_views import RequestCodeView
from apps.accounts.views.auth_views import VerifyCodeView

__all__ = [
    'LogoutView',
    'RequestCodeView',
    'VerifyCodeView',
]
