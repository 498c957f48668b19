"""FastAPI service for the Bio-Genomic What-If Engine."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from biowhatif.analysis import MutationAnalyzer
from biowhatif.chat import ChatService
from biowhatif.config import Settings, get_settings
from biowhatif.errors import WhatIfError
from biowhatif.models import ChatReply, ChatRequest, MutationAnalysis, MutationRequest, Preset
from biowhatif.prompts import DEPTH_INSTRUCTIONS
from biowhatif.structure import StructureProxy

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

PRESETS = [
    Preset(
        label="Sickle Cell Anemia",
        value=(
            "Perform a missense mutation on the HBB gene (Beta-globin). "
            "Replace the GAG codon at position 6 with GTG."
        ),
    ),
    Preset(label="Custom mutation", value=""),
]

app = FastAPI(
    title="Bio-Genomic What-If Engine",
    description="Gemini reasons through the physical consequences of genetic mutations",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(WhatIfError)
async def whatif_error_handler(request: Request, exc: WhatIfError):
    logger.warning("%s %s failed with %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = ", ".join(".".join(str(p) for p in err["loc"][1:]) or "body" for err in exc.errors())
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {fields}"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def get_analyzer(settings: Settings = Depends(get_settings)) -> MutationAnalyzer:
    return MutationAnalyzer(settings)


def get_chat_service(settings: Settings = Depends(get_settings)) -> ChatService:
    return ChatService(settings)


def get_structure_proxy(settings: Settings = Depends(get_settings)) -> StructureProxy:
    return StructureProxy(settings)


@app.get("/health")
def health_check(settings: Settings = Depends(get_settings)):
    return {
        "status": "healthy",
        "service": "bio-whatif-engine",
        "model": settings.gemini_model,
        "api_key_configured": settings.has_api_key,
    }


@app.get("/presets")
def get_presets():
    return {"presets": [p.model_dump() for p in PRESETS], "depths": list(DEPTH_INSTRUCTIONS)}


@app.post("/analyze", response_model=MutationAnalysis, response_model_exclude_none=True)
async def analyze(request: MutationRequest, analyzer: MutationAnalyzer = Depends(get_analyzer)):
    return await analyzer.analyze(request.mutation, request.explanation_depth)


@app.post("/chat", response_model=ChatReply)
async def chat(request: ChatRequest, chat_service: ChatService = Depends(get_chat_service)):
    message = await chat_service.reply(request.message, request.history)
    return ChatReply(message=message)


@app.get("/structure/{pdb_id}", response_class=PlainTextResponse)
async def structure(
    pdb_id: str,
    proxy: StructureProxy = Depends(get_structure_proxy),
    settings: Settings = Depends(get_settings),
):
    text = await proxy.fetch(pdb_id)
    return PlainTextResponse(
        text,
        headers={"Cache-Control": f"public, max-age={settings.structure_cache_seconds}"},
    )


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
