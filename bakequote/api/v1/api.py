"""API v1 router composition."""

from fastapi import APIRouter

from bakequote.api.v1.endpoints import auth, customers, featured, leads, pricing, public, quotes

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(public.router, prefix="/public", tags=["public"])
api_router.include_router(pricing.router, prefix="/pricing", tags=["pricing"])
api_router.include_router(leads.router, prefix="/leads", tags=["leads"])
api_router.include_router(quotes.router, prefix="/quotes", tags=["quotes"])
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(featured.router, prefix="/featured", tags=["featured"])
