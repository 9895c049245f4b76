"""
Admin Dashboard Router
Aggregate counts for the admin panel.
"""
from fastapi import APIRouter, Depends

from storefront.core.security import get_store
from storefront.repositories.base import StorefrontStore
from storefront.schemas.order import StatsOut, StatsResponse

router = APIRouter(tags=["Admin Dashboard"])


@router.get("/stats", response_model=StatsResponse)
def get_dashboard_stats(store: StorefrontStore = Depends(get_store)):
    """
    totalProducts, totalOrders, pendingOrders and totalRevenue.
    Revenue sums every order except cancelled ones.
    """
    return StatsResponse(stats=StatsOut.model_validate(store.stats()))
