"""Audio flashcards: projects of audio clips quizzed as multiple choice."""

__version__ = "0.1.0"
