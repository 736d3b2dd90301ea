from django.urls import path

from .views import LoginView, SignUpView, UserAddressView, UserDetailView

app_name = "accounts"

urlpatterns = [
    path("users/", SignUpView.as_view(), name="signup"),
    path("users/<int:user_id>", UserDetailView.as_view(), name="user-detail"),
    path("auth/login", LoginView.as_view(), name="login"),
    path("addresses/user/<int:user_id>", UserAddressView.as_view(), name="user-addresses"),
]
