import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from contextlib import asynccontextmanager
from vinheria.core.config import settings
from vinheria.core.database import SessionLocal, init_db
from vinheria.core.exceptions import InvalidSession, LoginRequired, VinheriaError
from vinheria.core.scheduler import start_scheduler, stop_scheduler
from vinheria.api.dependencies import get_session_handle
from vinheria.api.routes import auth, inventory
from vinheria.services.inventory_ledger import inventory_ledger
from vinheria.services.session_manager import session_manager

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def check_configuration():
    """Log misconfiguration that weakens or disables login"""
    if settings.get_access_token() is None:
        # Login stays closed until ACCESS_TOKEN is set
        logger.error("ACCESS_TOKEN is not set: every login attempt will be rejected")
    if settings.SESSION_SECRET == "troque-este-segredo":
        logger.warning("SESSION_SECRET is the built-in default; set it before deploying")


def prepare_database():
    """Create missing tables and load starter stock into an empty ledger"""
    init_db()
    db = SessionLocal()
    try:
        inventory_ledger.seed_if_empty(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: create tables, seed inventory, start session cleanup
    Shutdown: stop background scheduler
    """
    check_configuration()
    prepare_database()
    start_scheduler()
    yield
    stop_scheduler()


app = FastAPI(
    title="Vinheria Stock API",
    description="Shared stock ledger behind password + access token login",
    version="1.0.0",
    lifespan=lifespan
)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    return RedirectResponse(url=exc.location, status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(VinheriaError)
async def vinheria_error_handler(request: Request, exc: VinheriaError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(auth.router)
app.include_router(inventory.router)


@app.get("/")
async def root(request: Request):
    """Send signed-in users to the inventory and everyone else to login"""
    try:
        session_manager.validate(get_session_handle(request))
    except InvalidSession:
        return RedirectResponse(url=settings.LOGIN_URL, status_code=status.HTTP_303_SEE_OTHER)
    return RedirectResponse(url=inventory.INVENTORY_URL, status_code=status.HTTP_303_SEE_OTHER)


@app.get("/login")
async def login_info():
    """Where unauthenticated requests land"""
    return {
        "message": "Login required",
        "login": "POST /auth/login (email, password, access_token)",
        "register": "POST /auth/register",
    }


@app.get("/health")
async def health():
    """Health check endpoint - used by monitoring/deployment tools"""
    return {"status": "healthy"}
