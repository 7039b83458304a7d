import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from db import Base, engine
from relocation.logic.constants import MESSAGE_INVALID_PROFILE
from relocation.routes import router as quiz_router

load_dotenv()

logging.basicConfig(level=logging.INFO)
logging.info("App starting")

app = FastAPI(title="Relocation Matcher API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if engine is not None:
    Base.metadata.create_all(bind=engine)

app.include_router(quiz_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logging.info(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"ok": False, "message": MESSAGE_INVALID_PROFILE, "detail": jsonable_encoder(exc.errors())},
    )


@app.get("/", tags=["meta"])
def root():
    return {"message": "Relocation Matcher API running"}


@app.get("/health", tags=["meta"], summary="Health check")
def health():
    return {"status": "ok"}
