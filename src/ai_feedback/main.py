# src/ai_feedback/main.py
# Run with: uvicorn ai_feedback.main:create_app --factory
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from ai_feedback.config import Settings
from ai_feedback.errors import EmptyFeedbackError, FeedbackError, InputRejected
from ai_feedback.models.feedback import Category, FeedbackItem
from ai_feedback.models.review import OutputFormat
from ai_feedback.providers import get_provider
from ai_feedback.render.pdf import CommandPdfRenderer
from ai_feedback.review.engine import ReviewEngine
from ai_feedback.storage import ResponseStore
from ai_feedback.views import CategoryNode, ItemSegment, build_feedback_tree, item_detail, split_item_segments


logger = logging.getLogger(__name__)


class FeedbackRequest(BaseModel):
    file_name: str | None = None
    content: str = ""


class FeedbackResponse(BaseModel):
    status: str
    file_name: str | None = None
    response_id: str | None = None
    tree: list[CategoryNode] = Field(default_factory=list)
    attempts: int | None = None
    message: str | None = None


class DetailResponse(BaseModel):
    item: FeedbackItem
    segments: list[ItemSegment]


class ReportRequest(BaseModel):
    file_name: str | None = None
    content: str = ""
    format: OutputFormat = OutputFormat.HTML


class ReportResponse(BaseModel):
    status: str
    path: str | None = None
    format: OutputFormat | None = None
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None


def get_engine(request: Request) -> ReviewEngine | None:
    state = request.app.state
    if state.provider is None:
        return None
    return ReviewEngine(
        provider=state.provider,
        settings=state.settings,
        store=state.store,
        pdf_renderer=CommandPdfRenderer(state.settings.pdf_command, state.settings.pdf_timeout),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("AI Feedback Assistant starting...")
        yield
        logger.info("AI Feedback Assistant shutting down...")

    app = FastAPI(title="AI Feedback Assistant", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = ResponseStore(settings.responses_dir)
    app.state.provider = get_provider(settings)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": "0.1.0"}

    @app.post("/api/feedback", response_model=FeedbackResponse)
    async def review_file(body: FeedbackRequest, request: Request):
        engine = get_engine(request)
        if engine is None:
            return FeedbackResponse(status="error", file_name=body.file_name, message="No LLM provider configured")

        try:
            review = await engine.review_file(body.file_name, body.content)
        except InputRejected as e:
            return FeedbackResponse(status="rejected", file_name=body.file_name, message=str(e))
        except EmptyFeedbackError as e:
            return FeedbackResponse(status="error", file_name=body.file_name, attempts=e.attempts, message=str(e))
        except FeedbackError as e:
            return FeedbackResponse(status="error", file_name=body.file_name, message=str(e))
        except Exception as e:
            logger.exception(f"Review failed: {e}")
            return FeedbackResponse(status="error", file_name=body.file_name, message="Review failed unexpectedly")

        return FeedbackResponse(
            status="completed",
            file_name=review.file_name,
            response_id=review.json_path.stem,
            tree=build_feedback_tree(review.result),
            attempts=review.attempts,
            message="Request timed out; showing fallback feedback" if review.timed_out else None,
        )

    @app.get("/api/feedback/{response_id}/{category}/{index}", response_model=DetailResponse)
    async def feedback_detail(response_id: str, category: Category, index: int, request: Request):
        store: ResponseStore = request.app.state.store
        json_path = store.responses_dir / f"{response_id}.json"
        if json_path.parent != store.responses_dir or not json_path.exists():
            raise HTTPException(status_code=404, detail="Feedback not found")

        result = store.load_parse_result(json_path)
        try:
            item = item_detail(result, category, index)
        except IndexError:
            raise HTTPException(status_code=404, detail="Feedback item not found")
        return DetailResponse(item=item, segments=split_item_segments(item.content))

    @app.post("/api/report", response_model=ReportResponse)
    async def generate_report(body: ReportRequest, request: Request):
        engine = get_engine(request)
        if engine is None:
            return ReportResponse(status="error", error="No LLM provider configured")

        try:
            outcome = await engine.generate_report(body.file_name, body.content, body.format)
        except InputRejected as e:
            return ReportResponse(status="rejected", error=str(e))
        except FeedbackError as e:
            return ReportResponse(status="error", error=str(e))
        except Exception as e:
            logger.exception(f"Report generation failed: {e}")
            return ReportResponse(status="error", error="Report generation failed unexpectedly")

        return ReportResponse(
            status="completed",
            path=str(outcome.path),
            format=body.format,
            warnings=outcome.warnings,
        )

    return app
