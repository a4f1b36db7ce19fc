import time

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.auth_utils import require_verified_user
from app.dependencies import get_expression_analyzer, get_translator
from app.integrations import SIGN_LANGUAGE_RESULTS, ExpressionAnalyzer, Translator
from app.schemas import TranscriptCreateRequest, VideoProcessRequest, VideoUploadRequest
from core.database import (
    create_transcript,
    create_video_session,
    get_transcript,
    get_transcripts_for_user,
    get_video_session,
    get_video_sessions_for_user,
    save_video_results,
)
from core.errors import Forbidden, NotFound

router = APIRouter(prefix="/api", tags=["media"])

SAMPLE_PHRASE = "Hello, how are you today?"


@router.post("/videos/upload")
def upload_video(body: VideoUploadRequest, user: dict = Depends(require_verified_user)):
    video_url = body.video_data or body.video_url or f"video-{int(time.time() * 1000)}.webm"
    session = create_video_session(user_id=user["id"], video_url=video_url)
    return {"session": session, "message": "Video session created"}


@router.post("/videos/process")
def process_video(
    body: VideoProcessRequest,
    user: dict = Depends(require_verified_user),
    analyzer: ExpressionAnalyzer = Depends(get_expression_analyzer),
    translator: Translator = Depends(get_translator),
):
    session = get_video_session(body.session_id)
    if not session:
        raise NotFound("Video session not found")
    if session["userId"] != user["id"]:
        raise Forbidden("Unauthorized")

    sign_language = [dict(r) for r in SIGN_LANGUAGE_RESULTS]
    expression = analyzer.analyze(session["videoUrl"] or "")
    translations = translator.translate(SAMPLE_PHRASE)
    save_video_results(
        session["id"],
        sign_language_results=sign_language,
        facial_expression_results=expression,
        translation_results=translations,
    )
    return {
        "signLanguageResults": sign_language,
        "facialExpressionResults": expression,
        "translationResults": translations,
        "message": "Video processed successfully",
    }


@router.get("/videos/history")
def video_history(user: dict = Depends(require_verified_user)):
    return get_video_sessions_for_user(user["id"])


@router.post("/transcripts/generate")
def generate_transcript(body: TranscriptCreateRequest, user: dict = Depends(require_verified_user)):
    transcript = create_transcript(
        user_id=user["id"],
        video_session_id=body.video_session_id,
        content=body.content,
    )
    return {"transcript": transcript, "message": "Transcript created successfully"}


@router.get("/transcripts/history")
def transcript_history(user: dict = Depends(require_verified_user)):
    return get_transcripts_for_user(user["id"])


@router.get("/transcripts/{transcript_id}/download")
def download_transcript(transcript_id: str, user: dict = Depends(require_verified_user)):
    transcript = get_transcript(transcript_id)
    if not transcript:
        raise NotFound("Transcript not found")
    if transcript["userId"] != user["id"]:
        raise Forbidden("Unauthorized")
    return PlainTextResponse(
        transcript["content"],
        headers={"Content-Disposition": f'attachment; filename="transcript-{transcript_id}.txt"'},
    )
