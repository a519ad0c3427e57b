# main.py
import sys
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from config import ALLOWED_ORIGINS, ALLOWED_METHODS, ALLOWED_HEADERS
from database import init_db, store
from routes import accounts, auth, catalog, courses, deliveries, learning, notifications, orders
from routes.deliveries import setup_delivery_options

app = FastAPI(title="Course catalog backend")

# One allow-list for every service
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=ALLOWED_METHODS,
    allow_headers=ALLOWED_HEADERS,
)

app.include_router(catalog.router)
app.include_router(courses.router)
app.include_router(auth.router)
app.include_router(accounts.router)
app.include_router(orders.router)
app.include_router(notifications.router)
app.include_router(deliveries.router)
app.include_router(learning.router)


@app.on_event("startup")
async def startup_event():
    await init_db()
    await setup_delivery_options(store)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
