# app.py
# DEPENDENCIES
import sys
import time
import json
import signal
import uvicorn
import numpy as np
from typing import Any
from typing import List
from typing import Dict
from pathlib import Path
from pydantic import Field
from fastapi import FastAPI
from fastapi import Request
from typing import Optional
from datetime import datetime
from pydantic import BaseModel
from fastapi import HTTPException
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from utils.logger import log_info
from utils.logger import log_error
from config.settings import settings
from utils.logger import RiskEngineLogger
from utils.validators import InputValidator
from services.risk_analyzer import RiskAnalysisEngine


# ============================================================================
# CUSTOM SERIALIZATION METHODS
# ============================================================================
class NumpyJSONEncoder(json.JSONEncoder):
    def default(self, obj: Any) -> Any:
        if isinstance(obj, (np.float32, np.float64)):
            return float(obj)

        elif isinstance(obj, (np.int32, np.int64, np.int8, np.uint8)):
            return int(obj)

        elif isinstance(obj, np.ndarray):
            return obj.tolist()

        elif isinstance(obj, np.bool_):
            return bool(obj)

        elif hasattr(obj, 'to_dict'):
            return obj.to_dict()

        elif isinstance(obj, (set, tuple)):
            return list(obj)

        return super().default(obj)


class NumpyJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:

        return json.dumps(obj          = content,
                          ensure_ascii = False,
                          allow_nan    = False,
                          indent       = None,
                          separators   = (",", ":"),
                          cls          = NumpyJSONEncoder,
                         ).encode("utf-8")


# PYDANTIC SCHEMAS
class UserPreferencesModel(BaseModel):
    privacy_weight       : Optional[float] = Field(default = None, ge = 0.0, le = 1.0)
    legal_rights_weight  : Optional[float] = Field(default = None, ge = 0.0, le = 1.0)
    convenience_weight   : Optional[float] = Field(default = None, ge = 0.0, le = 1.0)
    risk_threshold       : Optional[int]   = Field(default = None, ge = 0, le = 100)
    enable_notifications : Optional[bool]  = None


class AnalyzeRequest(BaseModel):
    # Left untyped so that missing or non-string text is answered with 400, not 422
    text             : Any                            = None
    url              : Optional[str]                  = None
    language         : str                            = settings.DEFAULT_LANGUAGE
    user_preferences : Optional[UserPreferencesModel] = None


class BatchAnalyzeRequest(BaseModel):
    texts            : Any                            = None
    language         : str                            = settings.DEFAULT_LANGUAGE
    user_preferences : Optional[UserPreferencesModel] = None


class ErrorResponse(BaseModel):
    error     : str
    detail    : str
    timestamp : str


# FASTAPI APPLICATION : Global instances
analysis_engine : Optional[RiskAnalysisEngine] = None
app_start_time                                 = time.time()

# Initialize logger
RiskEngineLogger.setup(log_dir  = settings.LOG_DIR,
                       app_name = settings.LOG_APP_NAME,
                      )


@asynccontextmanager
async def lifespan(app: FastAPI):
    global analysis_engine
    log_info(f"{settings.APP_NAME} v{settings.APP_VERSION} starting up")

    try:
        analysis_engine = RiskAnalysisEngine()
        log_info("Risk analysis engine initialized", engine = settings.ENGINE_NAME)

    except Exception as e:
        log_error(e, context = {"operation": "startup"})
        raise

    log_info(f"Server: {settings.HOST}:{settings.PORT}")

    try:
        yield

    finally:
        analysis_engine = None
        log_info("Server shutdown complete")


# Define the application
app = FastAPI(title                  = settings.APP_NAME,
              version                = settings.APP_VERSION,
              description            = "Deterministic risk analysis of terms of service and privacy policies",
              docs_url               = "/api/docs",
              redoc_url              = "/api/redoc",
              default_response_class = NumpyJSONResponse,
              lifespan               = lifespan,
             )

# CORS middleware
app.add_middleware(CORSMiddleware,
                   allow_origins      = settings.CORS_ORIGINS,
                   allow_origin_regex = settings.CORS_ORIGIN_REGEX,
                   allow_credentials  = settings.CORS_ALLOW_CREDENTIALS,
                   allow_methods      = settings.CORS_ALLOW_METHODS,
                   allow_headers      = settings.CORS_ALLOW_HEADERS,
                  )


# HELPER FUNCTIONS
def resolve_preferences(user_preferences: Optional[UserPreferencesModel]) -> Dict[str, Any]:
    supplied = user_preferences.dict() if user_preferences else None

    return InputValidator.normalize_preferences(supplied)


def fallback_payload() -> Dict[str, Any]:
    return RiskAnalysisEngine.get_fallback_analysis().to_dict()


def validate_batch_items(texts: List[Any]) -> None:
    for index, item in enumerate(texts):
        if not isinstance(item, dict):
            raise HTTPException(status_code = 400,
                                detail      = f"Batch item {index} must be an object with a 'text' field",
                               )

        is_valid, validation_type, message = InputValidator.validate_text(item.get("text"))

        if not is_valid:
            raise HTTPException(status_code = InputValidator.status_code_for(validation_type),
                                detail      = f"Batch item {index}: {message}",
                               )

        url = item.get("url")

        if url is not None and not isinstance(url, str):
            raise HTTPException(status_code = 400,
                                detail      = f"Batch item {index}: url must be a string",
                               )


# API ROUTES
@app.get("/health")
async def health_check():
    return {"status"    : "healthy",
            "timestamp" : datetime.now().isoformat(),
            "version"   : settings.APP_VERSION,
            "uptime_s"  : round(time.time() - app_start_time, 3),
            "features"  : {"clause_segmentation"        : True,
                           "multi_label_classification" : True,
                           "risk_scoring"               : True,
                           "xai"                        : True,
                           "benchmark"                  : True,
                          },
           }


@app.post("/api/analyze")
async def analyze_legal_text(request: AnalyzeRequest):
    is_valid, validation_type, message = InputValidator.validate_text(request.text)

    if not is_valid:
        raise HTTPException(status_code = InputValidator.status_code_for(validation_type),
                            detail      = message,
                           )

    if not analysis_engine:
        return NumpyJSONResponse(status_code = 503,
                                 content     = {"error"    : "Service not initialized",
                                                "message"  : "Risk analysis engine is unavailable",
                                                "fallback" : fallback_payload(),
                                               },
                                )

    preferences = resolve_preferences(request.user_preferences)

    log_info("Analyzing text", has_url = bool(request.url), text_length = len(request.text))

    start_time  = time.perf_counter()

    try:
        analysis = analysis_engine.analyze(text             = request.text,
                                           url              = request.url,
                                           language         = request.language,
                                           user_preferences = preferences,
                                          )

    except Exception as e:
        log_error(e, context = {"endpoint": "/api/analyze"})

        return NumpyJSONResponse(status_code = 500,
                                 content     = {"error"    : "Analysis failed",
                                                "message"  : str(e),
                                                "fallback" : fallback_payload(),
                                               },
                                )

    processing_time    = round((time.perf_counter() - start_time) * 1000)
    result             = analysis.to_dict()
    result["metadata"] = {**result["metadata"],
                          "processing_time_ms" : processing_time,
                          "timestamp"          : datetime.now().isoformat(),
                          "text_length"        : len(request.text),
                          "language"           : request.language,
                         }

    return result


@app.post("/api/analyze/batch")
async def analyze_batch(request: BatchAnalyzeRequest):
    is_valid, _, message = InputValidator.validate_batch(request.texts)

    if not is_valid:
        raise HTTPException(status_code = 400,
                            detail      = message,
                           )

    validate_batch_items(request.texts)

    if not analysis_engine:
        raise HTTPException(status_code = 503,
                            detail      = "Service not initialized",
                           )

    preferences = resolve_preferences(request.user_preferences)

    try:
        analyses = analysis_engine.analyze_batch(items            = request.texts,
                                                 language         = request.language,
                                                 user_preferences = preferences,
                                                )

    except Exception as e:
        log_error(e, context = {"endpoint": "/api/analyze/batch"})

        return NumpyJSONResponse(status_code = 500,
                                 content     = {"error"   : "Batch analysis failed",
                                                "message" : str(e),
                                               },
                                )

    return {"analyses" : [analysis.to_dict() for analysis in analyses],
            "metadata" : {"batch_size" : len(request.texts),
                          "timestamp"  : datetime.now().isoformat(),
                         },
           }


@app.get("/api/model/info")
async def get_model_info():
    return {"model"         : settings.ENGINE_NAME,
            "type"          : "Rule-based pattern matching",
            "capabilities"  : ["Clause segmentation",
                               "Multi-label classification",
                               "Risk scoring with user preferences",
                               "Explainability (XAI)",
                               "Industry benchmarks",
                              ],
            "version"       : settings.APP_VERSION,
            "deterministic" : True,
           }


@app.get("/api/categories")
async def get_categories():
    if not analysis_engine:
        raise HTTPException(status_code = 503,
                            detail      = "Service not initialized",
                           )

    return analysis_engine.get_categories()


# ERROR HANDLERS AND MIDDLEWARE
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return NumpyJSONResponse(status_code = exc.status_code,
                             content     = ErrorResponse(error     = str(exc.detail),
                                                         detail    = str(exc.detail),
                                                         timestamp = datetime.now().isoformat(),
                                                        ).dict()
                            )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    log_error(exc, context = {"path": request.url.path})

    return NumpyJSONResponse(status_code = 500,
                             content     = ErrorResponse(error     = "Internal server error",
                                                         detail    = str(exc),
                                                         timestamp = datetime.now().isoformat(),
                                                        ).dict()
                            )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time   = time.time()
    response     = await call_next(request)
    process_time = time.time() - start_time

    log_info(f"API Request: {request.method} {request.url.path} - Status: {response.status_code} - Duration: {process_time:.3f}s")

    return response



# MAIN
def main():
    def signal_handler(sig, frame):
        print("\nReceived Ctrl+C, shutting down gracefully...")
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)

    try:
        uvicorn.run("app:app",
                    host      = settings.HOST,
                    port      = settings.PORT,
                    reload    = settings.RELOAD,
                    workers   = settings.WORKERS,
                    log_level = settings.LOG_LEVEL.lower(),
                   )

    except KeyboardInterrupt:
        print("\nServer stopped by user")

    except Exception as e:
        log_error(e, context = {"operation": "server"})

        sys.exit(1)


if __name__ == "__main__":
    main()
