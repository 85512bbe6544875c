"""Audio clip ingestion checks and playback media types."""

from __future__ import annotations

from pathlib import PurePath
from typing import Optional

from audio_flashcards.core.config import AudioSettings, settings


# Playback media type per extension; anything else falls back to audio/<ext>
_MEDIA_TYPES = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
}


class AudioValidationError(ValueError):
    """The uploaded clip cannot be stored as a flashcard."""


class UnsupportedAudioType(AudioValidationError):
    pass


class AudioTooLarge(AudioValidationError):
    pass


class EmptyAudio(AudioValidationError):
    pass


def media_type_for(file_name: str) -> str:
    """Media type used to play back a stored clip, derived from its extension."""
    ext = PurePath(file_name).suffix.lower().lstrip(".")
    if not ext:
        return "application/octet-stream"
    return _MEDIA_TYPES.get(ext, f"audio/{ext}")


def validate_audio(
    file_name: str,
    content_type: Optional[str],
    data: bytes,
    audio_settings: Optional[AudioSettings] = None,
) -> None:
    """Raise an AudioValidationError if the clip is not an accepted upload."""
    cfg = audio_settings or settings.audio

    ext = PurePath(file_name or "").suffix.lower()
    if ext not in cfg.allowed_extensions:
        raise UnsupportedAudioType(
            "This file type is not allowed. Please upload an audio file "
            f"({', '.join(cfg.allowed_extensions)})."
        )
    if (content_type or "").lower() not in cfg.allowed_mime_types:
        raise UnsupportedAudioType(f"Unsupported audio content type: {content_type}")

    if len(data) > cfg.max_file_size:
        limit_mb = cfg.max_file_size // (1024 * 1024)
        raise AudioTooLarge(f"File size is too large, limit the file size to {limit_mb}MB.")
    if not data:
        raise EmptyAudio("The audio file is empty.")
