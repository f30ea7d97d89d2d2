from __future__ import annotations

import logging

import pytest

from pysettle import Fixup, FixupInfo, Leaf, Namespace, create
from pysettle.errors import FixupError, OnFixupError
from pysettle.notify import FIXUP_EVENT, LoggingSink
from pysettle.spec import Violation
from tests.utils import RecordingSink, c


def leading_slash(value):
    if value[0] == "/":
        return None
    return Fixup(value=f"/{value}", messages=["must have leading slash"])


def test_setting_can_be_fixed_up() -> None:
    calls = []
    settings = create(
        {"path": Leaf(initial=c("/foo"), fixup=leading_slash)},
        on_fixup=lambda info, default: calls.append(info),
    )
    assert settings.change({"path": "foo"}).data == {"path": "/foo"}
    assert calls == [
        FixupInfo(
            name="path",
            before="foo",
            after="/foo",
            messages=["must have leading slash"],
            path=("path",),
        )
    ]


def test_namespace_shorthand_runs_through_fixups() -> None:
    calls = []
    settings = create(
        {
            "path": Namespace(
                shorthand=lambda value: {"to": value},
                fields={"to": Leaf(initial=c("/foo"), fixup=leading_slash)},
            )
        },
        on_fixup=lambda info, default: calls.append(info),
    )
    assert settings.change({"path": "foo"}).data == {"path": {"to": "/foo"}}
    assert [(i.name, i.before, i.after, i.path) for i in calls] == [
        ("to", "foo", "/foo", ("path", "to"))
    ]


def test_fixup_runs_before_validation() -> None:
    settings = create(
        {
            "path": Leaf(
                initial=c("/"),
                fixup=leading_slash,
                validate=lambda v: None if v.startswith("/") else Violation(["relative"]),
            )
        },
        sink=RecordingSink(),
    )
    assert settings.change({"path": "etc"}).data == {"path": "/etc"}


def test_fixup_errors_are_wrapped() -> None:
    def fixup(value):
        raise RuntimeError("Unexpected error!")

    settings = create({"path": Leaf(initial=c("/"), fixup=fixup)})
    with pytest.raises(FixupError) as exc:
        settings.change({"path": ""})
    assert str(exc.value) == "Fixup for \"path\" failed while running on value ''\nUnexpected error!"


def test_on_fixup_errors_are_wrapped() -> None:
    def on_fixup(info, default):
        raise RuntimeError("Unexpected error!")

    settings = create(
        {"path": Leaf(initial=c("/"), fixup=lambda v: Fixup(value="foobar", messages=[]))},
        on_fixup=on_fixup,
    )
    with pytest.raises(OnFixupError) as exc:
        settings.change({"path": ""})
    assert str(exc.value) == 'on_fixup callback for "path" failed\nUnexpected error!'
    assert settings.data == {"path": "/"}


def test_no_notification_when_fixup_returns_none() -> None:
    calls = []
    settings = create(
        {"path": Leaf(initial=c("/"), fixup=lambda v: None)},
        on_fixup=lambda info, default: calls.append(info),
    )
    settings.change({"path": ""})
    assert calls == []
    assert settings.data == {"path": ""}


def test_notifications_follow_input_order() -> None:
    names = []
    fix = lambda v: Fixup(value=v.upper(), messages=["upper case only"])  # noqa: E731
    settings = create(
        {
            "a": Leaf(initial=c("A"), fixup=fix),
            "b": Namespace(fields={"x": Leaf(initial=c("X"), fixup=fix)}),
        },
        on_fixup=lambda info, default: names.append(info.name),
    )
    settings.change({"b": {"x": "x"}, "a": "a"})
    assert names == ["x", "a"]


def test_default_handler_logs_a_warning(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="pysettle")
    settings = create(
        {"a": Leaf(initial=c(""), fixup=lambda v: Fixup(value="fixed", messages=["..."]))}
    )
    settings.change({"a": "foo"})
    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.WARNING
    assert record.name == "pysettle"
    assert FIXUP_EVENT in record.getMessage()
    assert record.context == {"before": "foo", "after": "fixed", "name": "a", "messages": ["..."]}


def test_custom_handler_replaces_default(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="pysettle")
    settings = create(
        {"a": Leaf(initial=c(""), fixup=lambda v: Fixup(value="fixed", messages=["..."]))},
        on_fixup=lambda info, default: None,
    )
    settings.change({"a": "foo"})
    assert caplog.records == []


def test_custom_handler_can_call_default() -> None:
    sink = RecordingSink()
    settings = create(
        {"a": Leaf(initial=c(""), fixup=lambda v: Fixup(value="fixed", messages=["..."]))},
        on_fixup=lambda info, default: default(info),
        sink=sink,
    )
    settings.change({"a": "foo"})
    assert sink.events == [
        (FIXUP_EVENT, {"before": "foo", "after": "fixed", "name": "a", "messages": ["..."]})
    ]


def test_logging_sink_uses_given_logger_and_level(caplog) -> None:
    logger = logging.getLogger("tests.settings")
    caplog.set_level(logging.INFO, logger="tests.settings")
    LoggingSink(logger, level=logging.INFO).emit("event", {"name": "a"})
    assert [(r.name, r.levelno) for r in caplog.records] == [("tests.settings", logging.INFO)]
