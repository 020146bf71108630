# 📄 File: app/api/router.py
# 🧭 Purpose (Layman Explanation):
# The switchboard of PetVally: every feature's endpoints are plugged in here under one address
# book, grouped by who uses them (owners, caregivers, staff).
#
# 🧪 Purpose (Technical Summary):
# Aggregates every module router under `/api`. Role checks live in each route's dependencies;
# this file only fixes prefixes and OpenAPI tags.
#
# 🔗 Dependencies:
# - FastAPI APIRouter, every module's presentation/api/v1 routers
#
# 🔄 Connected Modules / Calls From:
# - app.main (create_application)

from fastapi import APIRouter

from app.modules.accounts.presentation.api.v1.admin_auth import admin_auth_router
from app.modules.accounts.presentation.api.v1.caregivers import caregivers_router
from app.modules.accounts.presentation.api.v1.users import users_router
from app.modules.admin.presentation.api.v1.admin import admin_router
from app.modules.caregiving.presentation.api.v1.caregiver_directory import caregiver_directory_router
from app.modules.caregiving.presentation.api.v1.caregiver_jobs import caregiver_jobs_router
from app.modules.caregiving.presentation.api.v1.reviews import reviews_router
from app.modules.caregiving.presentation.api.v1.user_jobs import user_jobs_router
from app.modules.community.presentation.api.v1.donation_posts import donation_posts_router
from app.modules.community.presentation.api.v1.missing_posts import missing_posts_router
from app.modules.notifications.presentation.api.v1.notifications import (
    caregiver_notifications_router,
    notifications_router,
)
from app.modules.pet_shop.presentation.api.v1.pet_shop import pet_shop_router
from app.modules.store.presentation.api.v1.cart import cart_router
from app.modules.store.presentation.api.v1.orders import orders_router
from app.modules.store.presentation.api.v1.ratings import ratings_router
from app.modules.store.presentation.api.v1.store import store_router
from app.modules.vet_care.presentation.api.v1.vetchat import vetchat_router
from app.modules.vet_care.presentation.api.v1.vets import appointments_router, vet_info_router

API_PREFIX = "/api"

# (router, prefix, tag); more specific prefixes first
ROUTES = (
    # Pet owners
    (notifications_router, "/users/notifications", "Notifications"),
    (pet_shop_router, "/users/petShop", "Pet Shop"),
    (store_router, "/users/store", "Store"),
    (cart_router, "/users/cart", "Cart"),
    (orders_router, "/users/orders", "Orders"),
    (ratings_router, "/users/products/rating", "Product Ratings"),
    (user_jobs_router, "/users/jobs", "Jobs"),
    (reviews_router, "/users/reviews", "Reviews"),
    (missing_posts_router, "/users/missingposts", "Missing Posts"),
    (donation_posts_router, "/users/donation", "Donation Posts"),
    (vet_info_router, "/users/vetinfo", "Vet Care"),
    (appointments_router, "/users/appointments", "Vet Care"),
    (vetchat_router, "/users/vetchat", "Vet Chat"),
    (users_router, "/users", "Users"),
    # Caregivers
    (caregiver_notifications_router, "/caregivers/notifications", "Notifications"),
    (caregiver_jobs_router, "/caregivers/jobs", "Caregiver Jobs"),
    (caregiver_directory_router, "/caregivers/caregivers", "Caregiver Directory"),
    (caregivers_router, "/caregivers", "Caregivers"),
    # Back-office
    (admin_auth_router, "/admin", "Admin Auth"),
    (admin_router, "/admin", "Admin"),
)

api_router = APIRouter(prefix=API_PREFIX)

for router, prefix, tag in ROUTES:
    api_router.include_router(router, prefix=prefix, tags=[tag])
