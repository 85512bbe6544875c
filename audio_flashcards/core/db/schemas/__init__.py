# Import models so Base metadata is aware of them
from .projects import Project  # noqa: F401
from .flashcards import Flashcard  # noqa: F401
