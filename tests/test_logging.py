import logging

from audio_flashcards.core.logging import ContextFilter, bind, get_logger


def test_context_filter_fills_defaults():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

    assert ContextFilter().filter(record)

    assert record.project == "-"
    assert record.session == "-"


def test_bound_logger_tags_records(caplog):
    log = bind(get_logger("audio_flashcards.tests"), project=3, session="abc123")

    with caplog.at_level(logging.INFO, logger="audio_flashcards.tests"):
        log.info("hello")
        log.info("override", extra={"session": "other"})

    first, second = caplog.records[-2:]
    assert (first.project, first.session) == (3, "abc123")
    assert (second.project, second.session) == (3, "other")
