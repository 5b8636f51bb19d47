"""FastAPI server exposing quiz sets and quiz sessions as JSON."""

from __future__ import annotations

from threading import Thread
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Response
from pydantic import BaseModel
import uvicorn

from quizdeck.constants.network_constants import API_LOG_LEVEL, DEFAULT_HOST, DEFAULT_PORT
from quizdeck.core.markdown_math_renderer import renderer
from quizdeck.core.models import QuizSet
from quizdeck.core.quiz_exporter import definition_to_dict
from quizdeck.core.quiz_importer import QuizImportError
from quizdeck.core.quiz_manager import QuizManager, UnknownSessionError
from quizdeck.core.scoring import SetSummary, completion_ratio, summarize_set
from quizdeck.core.services.progress_store import PersistenceError
from quizdeck.core.services.quiz_session import SessionAction, SessionState
from quizdeck.core.services.set_store import UnknownSetError


class StartSessionPayload(BaseModel):
    """Payload schema for opening a session over a stored set."""

    set_id: str


class SessionActionPayload(BaseModel):
    """Payload schema for one session command."""

    action: SessionAction
    answer_id: str | None = None


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def _serialize_summary(summary: SetSummary) -> dict[str, object]:
    return {
        "correct_count": summary.correct_count,
        "incorrect_count": summary.incorrect_count,
        "total_count": summary.total_count,
        "percentage": summary.percentage,
    }


def _serialize_set_card(quiz_set: QuizSet) -> dict[str, object]:
    return {
        "id": quiz_set.id,
        "name": quiz_set.name,
        "question_count": len(quiz_set.questions),
        "answered_count": len(quiz_set.progress),
        "completion_percentage": round(completion_ratio(quiz_set) * 100),
        "is_completed": quiz_set.is_completed,
        "summary": _serialize_summary(summarize_set(quiz_set)),
    }


def _serialize_state(state: SessionState, summary: SetSummary) -> dict[str, object]:
    question = state.current_question
    question_payload: dict[str, object] | None = None
    if question is not None:
        question_payload = {
            "id": question.id,
            "question_html": renderer.render_fragment(question.text),
            "allows_multiple_selection": question.allows_multiple_selection,
            "answers": [
                {
                    "id": answer.id,
                    "answer_html": renderer.render_inline(answer.text),
                    "is_selected": state.is_selected(answer),
                    # Correctness is only revealed once the answer was checked.
                    "is_correct": answer.is_correct if state.answer_checked else None,
                }
                for answer in question.answers
            ],
        }
    return {
        "set_id": state.set_id,
        "set_name": state.set_name,
        "phase": state.phase.name.lower(),
        "showing_summary": state.showing_summary,
        "progress_text": state.progress_text,
        "current_index": state.current_index,
        "question_count": len(state.questions_to_display),
        "answer_checked": state.answer_checked,
        "pending_selection": sorted(state.pending_selection),
        "is_completed": state.is_completed,
        "all_perfect_in_session": state.all_perfect_in_session,
        "completed_with_errors": state.completed_with_errors,
        "can_submit": state.can_submit,
        "can_go_next": state.can_go_next,
        "can_go_previous": state.can_go_previous,
        "can_finish": state.can_finish,
        "save_error": state.save_error,
        "question": question_payload,
        "summary": _serialize_summary(summary),
    }


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title="QuizDeck API", version="0.1.0")
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    @app.get("/sets")
    def list_sets(manager: QuizManager = Depends(quiz_manager_dep)) -> list[dict[str, object]]:
        return [_serialize_set_card(quiz_set) for quiz_set in manager.list_sets()]

    @app.get("/sets/{set_id}")
    def get_set(set_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            quiz_set = manager.get_set(set_id)
        except UnknownSetError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        payload: dict[str, object] = definition_to_dict(quiz_set)
        payload.update(_serialize_set_card(quiz_set))
        return payload

    @app.delete("/sets/{set_id}", status_code=204)
    def delete_set(set_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> Response:
        try:
            manager.get_set(set_id)
            manager.delete_set(set_id)
        except UnknownSetError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except PersistenceError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return Response(status_code=204)

    @app.get("/sets/{set_id}/summary")
    def get_set_summary(set_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            return _serialize_summary(manager.get_set_summary(set_id))
        except UnknownSetError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.get("/sets/{set_id}/export")
    def export_set(set_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> Response:
        try:
            document = manager.export_set_json(set_id)
        except UnknownSetError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return Response(content=document, media_type="application/json")

    @app.post("/sets/import", status_code=201)
    def import_set(
        document: dict[str, Any] = Body(...),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            quiz_set = manager.import_set_definition(document)
        except QuizImportError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except PersistenceError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return _serialize_set_card(quiz_set)

    @app.post("/sessions", status_code=201)
    def start_session(
        payload: StartSessionPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            session_id = manager.start_session(payload.set_id)
        except UnknownSetError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        state = manager.get_session_state(session_id)
        return {
            "session_id": session_id,
            "state": _serialize_state(state, manager.get_session_summary(session_id)),
        }

    @app.get("/sessions/{session_id}")
    def get_session(session_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            state = manager.get_session_state(session_id)
            summary = manager.get_session_summary(session_id)
        except UnknownSessionError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return _serialize_state(state, summary)

    @app.delete("/sessions/{session_id}", status_code=204)
    def close_session(session_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> Response:
        manager.close_session(session_id)
        return Response(status_code=204)

    @app.post("/sessions/{session_id}/actions")
    def apply_action(
        session_id: str,
        payload: SessionActionPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            state = manager.dispatch(session_id, payload.action, payload.answer_id)
            summary = manager.get_session_summary(session_id)
        except UnknownSessionError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _serialize_state(state, summary)

    return app


def start_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level=API_LOG_LEVEL)
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizDeckApiServer", daemon=True)
    thread.start()
    return thread
