"""
URL configuration for purchase API endpoints.
"""

from django.urls import path

from api.v1.purchases import views

urlpatterns = [
    path("purchases:checkout", views.StartCheckoutView.as_view(), name="purchases-checkout"),
    path("purchases:complete", views.CompletePurchaseView.as_view(), name="purchases-complete"),
    path(
        "purchases/complete",
        views.PurchaseRedirectView.as_view(),
        name="purchases-complete-redirect",
    ),
]
