"""
Shared fixtures for the Recipe API client tests.

Provides:
- a resolver pinned to http://localhost:3001
- RecordingBackend: an httpx.MockTransport that records outgoing requests
- an in-memory FastAPI backend implementing the Recipe endpoints, served
  through httpx.ASGITransport
"""

import json
import uuid
from typing import Callable, Dict, List, Optional

import httpx
import pytest
from fastapi import Depends, FastAPI, Header, HTTPException, status
from pydantic import BaseModel

from recipe_client.config import BaseUrlResolver

BASE_URL = "http://localhost:3001"


@pytest.fixture
def resolver():
    """Resolver that always returns the local backend address."""
    return BaseUrlResolver(sources=[], default=BASE_URL)


class RecordingBackend:
    """
    Mock backend that records every request it receives.

    The responder builds the response for each request; by default it
    answers 200 with an empty JSON object.
    """

    def __init__(self, responder: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: List[httpx.Request] = []
        self.responder = responder or (lambda request: httpx.Response(200, json={}))
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def backend():
    return RecordingBackend()


# --- In-memory Recipe backend -------------------------------------------------

RECIPES = {
    "1": {"id": "1", "title": "Pasta Carbonara"},
    "2": {"id": "2", "title": "Pasta Pomodoro"},
    "3": {"id": "3", "title": "Chicken Curry"},
}


class Credentials(BaseModel):
    email: str
    password: str


class SaveRequest(BaseModel):
    recipe_id: str


def build_backend_app() -> FastAPI:
    """Create a fresh backend app with its own users, tokens and saved lists."""
    app = FastAPI()
    passwords: Dict[str, str] = {}
    tokens: Dict[str, str] = {}
    saved: Dict[str, List[str]] = {}

    def current_user(authorization: Optional[str] = Header(None)) -> str:
        if not authorization or not authorization.startswith("Bearer "):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
        email = tokens.get(authorization[len("Bearer "):])
        if email is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
        return email

    def issue_token(email: str) -> str:
        token = uuid.uuid4().hex
        tokens[token] = email
        return token

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/recipes/search")
    def search(q: str = ""):
        needle = q.lower()
        return {"results": [r for r in RECIPES.values() if needle in r["title"].lower()]}

    @app.get("/recipes/{recipe_id}")
    def get_recipe(recipe_id: str):
        if recipe_id not in RECIPES:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
        return RECIPES[recipe_id]

    @app.get("/users/me/saved")
    def list_saved(email: str = Depends(current_user)):
        return {"results": [RECIPES[i] for i in saved.get(email, [])]}

    @app.post("/users/me/saved")
    def save(payload: SaveRequest, email: str = Depends(current_user)):
        if payload.recipe_id not in RECIPES:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
        items = saved.setdefault(email, [])
        if payload.recipe_id not in items:
            items.append(payload.recipe_id)
        return {"saved": True, "recipe_id": payload.recipe_id}

    @app.delete("/users/me/saved/{recipe_id}")
    def unsave(recipe_id: str, email: str = Depends(current_user)):
        items = saved.get(email, [])
        if recipe_id in items:
            items.remove(recipe_id)
        return {"removed": True, "recipe_id": recipe_id}

    @app.post("/auth/signup")
    def signup(credentials: Credentials):
        if credentials.email in passwords:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
        passwords[credentials.email] = credentials.password
        return {"access_token": issue_token(credentials.email), "user": {"email": credentials.email}}

    @app.post("/auth/login")
    def login(credentials: Credentials):
        if passwords.get(credentials.email) != credentials.password:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
        return {"access_token": issue_token(credentials.email), "user": {"email": credentials.email}}

    return app


@pytest.fixture
def backend_transport():
    """ASGI transport serving a fresh in-memory Recipe backend."""
    return httpx.ASGITransport(app=build_backend_app())
