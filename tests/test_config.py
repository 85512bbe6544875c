import pytest
from pydantic import ValidationError

from audio_flashcards.core.config import QuizSettings


def test_num_choices_from_env(monkeypatch):
    monkeypatch.setenv("QUIZ_NUM_CHOICES", "3")
    assert QuizSettings().num_choices == 3


@pytest.mark.parametrize("value", ["0", "-2"])
def test_num_choices_must_be_positive(monkeypatch, value):
    monkeypatch.setenv("QUIZ_NUM_CHOICES", value)
    with pytest.raises(ValidationError):
        QuizSettings()
