"""
API 路由
"""
from fastapi import APIRouter
from app.api import onsens, reviews, admin, csv_imports, geo

router = APIRouter()

router.include_router(onsens.router, prefix="/onsens", tags=["温泉"])
router.include_router(reviews.router, prefix="/onsens", tags=["评价"])
router.include_router(admin.router, prefix="/admin", tags=["管理"])
router.include_router(csv_imports.router, prefix="/admin/csv_imports", tags=["管理"])
router.include_router(geo.router, prefix="/geo", tags=["地理信息"])
