from .validation import (
    AudioTooLarge,
    AudioValidationError,
    EmptyAudio,
    UnsupportedAudioType,
    media_type_for,
    validate_audio,
)

__all__ = [
    "AudioTooLarge",
    "AudioValidationError",
    "EmptyAudio",
    "UnsupportedAudioType",
    "media_type_for",
    "validate_audio",
]
