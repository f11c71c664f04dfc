from itgl.logging_utils import parse_log_filter


def test_default_level(monkeypatch) -> None:
    monkeypatch.delenv("ITGL_LOG_FILTER", raising=False)
    level, filters = parse_log_filter()
    assert level == "warning"
    assert filters == {"": "WARNING"}


def test_module_levels() -> None:
    level, filters = parse_log_filter("debug, itgl.core.unify=trace, itgl.cli=false")
    assert level == "debug"
    assert filters == {"itgl.core.unify": "TRACE", "itgl.cli": False, "": "DEBUG"}


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("ITGL_LOG_FILTER", "INFO")
    assert parse_log_filter()[1][""] == "INFO"
