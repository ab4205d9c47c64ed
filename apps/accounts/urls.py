from django.urls import path

from apps.accounts import views

app_name = 'accounts'

urlpatterns = [
    path('request-code/', views.RequestCodeView.as_view(), name='request_code'),
    path('verify-code/', views.VerifyCodeView.as_view(), name='verify_code'),
    path('logout/', views.LogoutView.as_view(), name='logout'),
]
