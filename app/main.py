from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import errors, models  # noqa: F401  (registers tables on Base)
from .config import CORS_ORIGINS
from .controllers import accounts, auth, transactions, workspaces
from .database import engine, Base
from .logging_setup import configure_logging

configure_logging()

app = FastAPI(title="Shared Finance API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_STATUS = {
    errors.WorkspaceNotFound: 404,
    errors.MemberNotFound: 404,
    errors.AccountNotFound: 404,
    errors.TransactionNotFound: 404,
    errors.InviteNotFound: 404,
    errors.UserNotFound: 404,
    errors.InsufficientRole: 403,
    errors.LastOwner: 400,
    errors.InvalidAmount: 400,
    errors.AlreadyMember: 409,
    errors.InviteAlreadyPending: 409,
    errors.DuplicateEmail: 409,
    errors.InvalidCredentials: 401,
    errors.StorageError: 503,
}


@app.exception_handler(errors.DomainError)
async def domain_error_handler(request: Request, exc: errors.DomainError):
    status_code = ERROR_STATUS.get(type(exc), 400)
    return JSONResponse(status_code=status_code, content={"error": exc.kind, "detail": exc.message})


# Create database tables
Base.metadata.create_all(bind=engine)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(workspaces.router, prefix="/api/workspaces", tags=["workspaces"])
app.include_router(accounts.router, prefix="/api/workspaces", tags=["accounts"])
app.include_router(transactions.router, prefix="/api/workspaces", tags=["transactions"])


@app.get("/")
def root():
    return {"message": "Service is running"}
