"""
FastAPI application for the voting service.

All state is held in memory and is lost when the process exits.
"""
import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from voting_app.application.handlers import query_bus
from voting_app.application.queries import GetCandidatesQuery, GetResultsQuery, GetVotingStatusQuery
from voting_app.config import settings
from voting_app.interfaces.candidate_controller import router as candidate_router
from voting_app.interfaces.voter_controller import router as voter_router
from voting_app.interfaces.vote_controller import router as vote_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent

app = FastAPI(
    title="Voting Service",
    description="Register candidates and voters, cast votes and tally results",
)

# Any origin, method and header may call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)

app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=BASE_DIR / "templates")

app.include_router(candidate_router)
app.include_router(voter_router)
app.include_router(vote_router)


@app.get("/", response_class=HTMLResponse, include_in_schema=False)
def home(request: Request):
    candidates = query_bus.handle(GetCandidatesQuery())
    results = query_bus.handle(GetResultsQuery())
    status = query_bus.handle(GetVotingStatusQuery())
    return templates.TemplateResponse(
        request,
        "index.html",
        {"candidates": candidates, "results": results, "is_active": status["is_active"]},
    )


def run():
    logger.info(f"Starting {settings.SERVICE_NAME} on {settings.HOST}:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
