"""
Video sessions (uploaded or recorded clips plus their mock analysis results)
and the transcripts users save against them.
"""
from core.db.media.media_store import (
    create_transcript,
    create_video_session,
    get_transcript,
    get_transcripts_for_user,
    get_video_session,
    get_video_sessions_for_user,
    save_video_results,
)

__all__ = [
    "create_transcript",
    "create_video_session",
    "get_transcript",
    "get_transcripts_for_user",
    "get_video_session",
    "get_video_sessions_for_user",
    "save_video_results",
]
