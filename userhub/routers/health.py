from fastapi import APIRouter, Request

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def alive():
    return {"ok": True}


@router.get("/db")
def db_status(request: Request):
    store = request.app.state.user_store
    counts = store.counts()
    return {"ok": True, "managers_seeded": counts["managers"], "users": counts["users"]}
