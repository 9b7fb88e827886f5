# Run from project root: uvicorn chat_gateway.main:app --reload
# or: python -m chat_gateway.main

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_gateway.api.routes import router
from chat_gateway.core.config import CORS_ALLOW_ORIGINS, PORT

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


app = FastAPI(title="AI Agent API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


if __name__ == "__main__":
    logger.info("AI Agent API booting on http://localhost:%d", PORT)
    logger.info("health: GET  http://localhost:%d/api/health", PORT)
    logger.info("chat:   POST http://localhost:%d/api/chat", PORT)
    logger.info("stream: POST http://localhost:%d/api/chat/stream", PORT)
    uvicorn.run(app, host="0.0.0.0", port=PORT)
