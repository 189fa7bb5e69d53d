"""FastAPI entry point for the Balance Auditor backend service."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from balance_auditor.api import api_router
from balance_auditor.providers.alchemy_client import close_client, get_client
from balance_auditor.providers.base import ProviderError


LOGGER = logging.getLogger(__name__)

logging.basicConfig(level=logging.INFO)

DEFAULT_CORS_ORIGINS: List[str] = [
	"http://localhost:5173",
	"http://127.0.0.1:5173",
]


def cors_origins(raw: Optional[str] = None) -> List[str]:
	"""Parse a comma separated origin list, falling back to the local dev server."""
	if raw is None:
		raw = os.getenv("CORS_ALLOW_ORIGINS")
	origins = [origin.strip() for origin in (raw or "").split(",") if origin.strip()]
	return origins or list(DEFAULT_CORS_ORIGINS)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
	"""Create the shared Alchemy client on startup and close it on shutdown."""
	try:
		get_client()
	except ProviderError as exc:
		LOGGER.warning("Alchemy client unavailable at startup, queries will fail: %s", exc)
	try:
		yield
	finally:
		close_client()


def create_app() -> FastAPI:
	"""Build the FastAPI application with CORS and the balance routes."""
	application = FastAPI(
		title="Balance Auditor Backend",
		version="1.0.0",
		description="Looks up ERC-20 token balances and metadata for Ethereum wallets.",
		lifespan=lifespan,
	)

	allowed_origins = cors_origins()
	LOGGER.info("Allowing CORS origins: %s", ", ".join(allowed_origins))
	application.add_middleware(
		CORSMiddleware,
		allow_origins=allowed_origins,
		allow_credentials=False,
		allow_methods=["GET", "POST"],
		allow_headers=["*"],
	)

	application.include_router(api_router)

	@application.get("/health")
	def healthcheck() -> Dict[str, str]:
		"""Basic readiness probe."""
		return {"status": "ok"}

	return application


app = create_app()
