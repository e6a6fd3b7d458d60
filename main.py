from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from config import Config
from models import AnalysisRequest, AnalysisErrorResponse
from analyzer import ScamAnalyzer, failed_result
from errors import InvalidType, UpstreamFailure
from llm_client import CompletionClient
from prompt_builder import PROMPT_VERSION
import logging
import uvicorn

# Setup Logger
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("scam-analyzer-api")

app = FastAPI(title="Scam Analyzer API")

# Browser front end calls this API directly
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.ALLOWED_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Initialize modules
completion_client = CompletionClient(
    groq_api_key=Config.GROQ_API_KEY,
    openai_api_key=Config.OPENAI_API_KEY,
    groq_model=Config.GROQ_MODEL,
    openai_model=Config.OPENAI_MODEL,
    temperature=Config.LLM_TEMPERATURE,
)
analyzer = ScamAnalyzer(completion_client)

def get_analyzer() -> ScamAnalyzer:
    return analyzer

@app.post("/api/analyze")
def analyze_endpoint(request: AnalysisRequest, scam_analyzer: ScamAnalyzer = Depends(get_analyzer)):
    try:
        result = scam_analyzer.analyze(request.type, request.content)
    except InvalidType as e:
        logger.info(f"Rejected analysis request: {e}")
        return JSONResponse(status_code=400, content={"error": "Invalid analysis type"})
    except UpstreamFailure as e:
        # Never leak provider errors to the user; report a degraded verdict instead
        logger.error(f"Analysis error ({e.provider or 'no provider'}): {e}")
        degraded = AnalysisErrorResponse(error="Analysis failed", **failed_result().model_dump(by_alias=True))
        return JSONResponse(status_code=500, content=degraded.to_response())

    return result.to_response()

@app.get("/health")
def health_check():
    return {
        "status": "running",
        "service": "Scam Analyzer",
        "provider": completion_client.provider,
        "promptVersion": PROMPT_VERSION,
    }

if __name__ == "__main__":
    uvicorn.run("main:app", host=Config.HOST, port=Config.PORT, reload=True)
