import os
from fastapi import FastAPI
from app.db import Base, engine
from app.api.routes import router as api_router
from app import scheduler
import app.models  # noqa: F401 ensure models are imported so tables are known

# create FastAPI instance
app = FastAPI(title="signage-sync")
app.include_router(api_router)


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)
    if os.getenv("SCHEDULER_ENABLED", "1") == "1":
        scheduler.start()


@app.on_event("shutdown")
def on_shutdown():
    if scheduler.scheduler.running:
        scheduler.scheduler.shutdown(wait=False)
