import pytest

from audio_flashcards.core.config import settings
from audio_flashcards.modules.audio import (
    AudioTooLarge,
    EmptyAudio,
    UnsupportedAudioType,
    media_type_for,
    validate_audio,
)


@pytest.mark.parametrize(
    "file_name, expected",
    [
        ("robin.mp3", "audio/mpeg"),
        ("ROBIN.MP3", "audio/mpeg"),
        ("wren.wav", "audio/wav"),
        ("jay.ogg", "audio/ogg"),
        ("crow.flac", "audio/flac"),
        ("noext", "application/octet-stream"),
    ],
)
def test_media_type_for(file_name, expected):
    assert media_type_for(file_name) == expected


@pytest.mark.parametrize(
    "file_name, content_type",
    [("robin.mp3", "audio/mpeg"), ("robin.wav", "audio/x-wav"), ("robin.ogg", "audio/ogg")],
)
def test_accepts_supported_clips(file_name, content_type):
    validate_audio(file_name, content_type, b"data")


def test_rejects_extension():
    with pytest.raises(UnsupportedAudioType):
        validate_audio("robin.m4a", "audio/mpeg", b"data")


def test_rejects_content_type():
    with pytest.raises(UnsupportedAudioType):
        validate_audio("robin.mp3", "application/pdf", b"data")


def test_rejects_missing_content_type():
    with pytest.raises(UnsupportedAudioType):
        validate_audio("robin.mp3", None, b"data")


def test_size_limit_is_inclusive():
    small = settings.audio.model_copy(update={"max_file_size": 4})
    validate_audio("robin.mp3", "audio/mpeg", b"1234", small)
    with pytest.raises(AudioTooLarge):
        validate_audio("robin.mp3", "audio/mpeg", b"12345", small)


def test_rejects_empty():
    with pytest.raises(EmptyAudio):
        validate_audio("robin.mp3", "audio/mpeg", b"")
