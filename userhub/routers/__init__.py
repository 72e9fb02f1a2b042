"""
FastAPI routers grouped by domain (users, health).

Each file inside this package exposes an APIRouter that is included in the
application built by app.py. Endpoints only translate JSON bodies into service
calls; validation and integrity rules live in the services.
"""
