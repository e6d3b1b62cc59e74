"""
Generation backend.

Single endpoint forwarding ``{model, contents, config}`` to Gemini with the
server-side key and returning the raw provider response as JSON.
"""

import logging
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from google import genai
from pydantic import BaseModel

from ..base_config import SERVER_PORT, get_api_key

logger = logging.getLogger(__name__)

_clients: Dict[str, genai.Client] = {}


class GenerateRequest(BaseModel):
    model: str
    contents: Any
    config: Optional[Dict[str, Any]] = None


def get_genai_client() -> genai.Client:
    """Client for the configured key, created once per key."""
    api_key = get_api_key()
    if not api_key:
        raise RuntimeError("API_KEY not found in environment variables")
    if api_key not in _clients:
        _clients[api_key] = genai.Client(api_key=api_key)
    return _clients[api_key]


app = FastAPI(
    title="CineMind Generation Backend",
    description="Forwards generation requests to Gemini",
    version="1.0.0",
)

# Any origin may call the endpoint
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=PlainTextResponse)
async def health() -> str:
    return "CineMind Backend is Active"


@app.post("/api/generate")
async def generate(request: GenerateRequest):
    try:
        client = get_genai_client()
        response = await client.aio.models.generate_content(
            model=request.model,
            contents=request.contents,
            config=request.config or None,
        )
        return response.model_dump(mode="json", by_alias=True, exclude_none=True)

    except Exception as e:
        logger.error(f"Gemini API Error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": str(e) or "Internal Server Error", "details": repr(e)},
        )


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger.info(f"Gemini backend running on port {SERVER_PORT}")
    uvicorn.run(app, host="0.0.0.0", port=SERVER_PORT)


if __name__ == "__main__":
    main()
