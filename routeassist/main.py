import logging

from fastapi import FastAPI

from routeassist.config import settings
from routeassist.routers.extract_address import router as extract_address_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app = FastAPI(title="Route Assist API")

app.include_router(extract_address_router)


@app.get("/")
def root():
    return {"message": "API is running!"}
