from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from agent.agent import ChatProxy, UpstreamError, ValidationError
from agent.core.memory import SessionStore
from agent.core.presets import AGENT_PRESETS
from agent.core.prompt import OUTPUT_FORMATS, AgentConfig
from config.settings import get_settings


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("agent_chat")

app = FastAPI(title="Agent Chat Proxy", version="1.0.0")

# CORS: allow local frontend during development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class AgentConfigIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: Optional[str] = None
    goal: Optional[str] = None
    output_format: Optional[str] = Field(default=None, alias="outputFormat")

    def to_config(self) -> AgentConfig:
        return AgentConfig(
            role=self.role or "",
            goal=self.goal or "",
            output_format=self.output_format or "",
        )


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(default=None, description="User's latest message")
    session_id: Optional[str] = Field(
        default=None,
        alias="sessionId",
        description="Conversation identifier; the default session is used when omitted",
    )
    agent_config: Optional[AgentConfigIn] = Field(default=None, alias="agentConfig")


@lru_cache(maxsize=1)
def get_chat_proxy() -> ChatProxy:
    return ChatProxy(SessionStore(), settings=get_settings())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.get("/api/health")
def health() -> Dict[str, Any]:
    return {"status": "ok", "message": "Server is running"}


@app.get("/api/presets")
def presets() -> Dict[str, Any]:
    return {"presets": AGENT_PRESETS, "outputFormats": list(OUTPUT_FORMATS)}


@app.post("/api/chat")
def chat(req: ChatRequest, proxy: ChatProxy = Depends(get_chat_proxy)):
    logger.info(
        "Incoming chat: session_id=%s message_len=%s agent_config=%s",
        req.session_id,
        len(req.message or ""),
        req.agent_config is not None,
    )
    agent_config = req.agent_config.to_config() if req.agent_config else None
    try:
        result = proxy.chat(req.message, req.session_id, agent_config)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except UpstreamError as e:
        logger.exception("Completion call failed: %s", e.detail)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to get a response from the AI model",
                "details": e.detail,
            },
        )

    return {"message": result.message, "sessionId": result.session_id}


@app.post("/api/reset")
def reset(
    body: Any = Body(default=None),
    proxy: ChatProxy = Depends(get_chat_proxy),
) -> Dict[str, Any]:
    # Reset never rejects a body; anything unusable means the default session
    session_id = None
    if isinstance(body, dict) and body.get("sessionId") is not None:
        session_id = str(body["sessionId"])
    proxy.reset(session_id)
    return {"message": "Conversation history has been reset"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
