from fastapi import APIRouter, FastAPI
from routers import pages_router, students_router

# Registered in this order, once per worker
ROUTES: list[APIRouter] = [
    pages_router.router,
    students_router.router,
]


def register_routes(app: FastAPI, routes: list[APIRouter] = ROUTES):
    for router in routes:
        app.include_router(router)
