from conftest import make_block, make_pin
from flowcanvas import Connection, IssueSeverity, PinKind, validate_graph, validation_summary


def messages(issues, severity):
    return [i.message for i in issues if i.severity == severity]


def test_consistent_graph_has_no_issues(connected_graph):
    assert validate_graph(*connected_graph) == []


def test_empty_graph_is_informational():
    issues = validate_graph([], [], [])

    assert messages(issues, IssueSeverity.INFO) == ["Graph has no blocks"]
    assert validation_summary(issues)["valid"]


def test_pin_without_owner_block():
    issues = validate_graph([make_block("a", 0, 0)], [make_pin("x.out", "x", PinKind.OUTPUT, 0, 0)], [])

    assert issues[0].severity == IssueSeverity.ERROR
    assert issues[0].to_dict() == {
        "type": "error",
        "message": "Pin references non-existent block: x",
        "block_id": "x",
        "pin_id": "x.out",
    }


def test_connection_endpoints_must_exist_and_point_the_right_way():
    blocks = [make_block("a", 0, 0), make_block("b", 200, 0)]
    pins = [
        make_pin("a.out", "a", PinKind.OUTPUT, 150, 40, connected=True),
        make_pin("b.in", "b", PinKind.INPUT, 0, 40, connected=True),
    ]
    connections = [
        Connection(id="backwards", from_pin="b.in", to_pin="a.out"),
        Connection(id="dangling", from_pin="a.out", to_pin="nowhere"),
    ]

    issues = validate_graph(blocks, pins, connections)

    assert messages(issues, IssueSeverity.ERROR) == [
        "Connection starts at a non-output pin: b.in",
        "Connection ends at a non-input pin: a.out",
        "Connection references non-existent input pin: nowhere",
    ]
    assert validation_summary(issues)["valid"] is False


def test_input_with_two_sources_is_a_warning():
    blocks = [make_block("a", 0, 0), make_block("b", 0, 200), make_block("c", 300, 0)]
    pins = [
        make_pin("a.out", "a", PinKind.OUTPUT, 150, 40, connected=True),
        make_pin("b.out", "b", PinKind.OUTPUT, 150, 40, connected=True),
        make_pin("c.in", "c", PinKind.INPUT, 0, 40, connected=True),
    ]
    connections = [
        Connection(id="c1", from_pin="a.out", to_pin="c.in"),
        Connection(id="c2", from_pin="b.out", to_pin="c.in"),
    ]

    issues = validate_graph(blocks, pins, connections)

    assert messages(issues, IssueSeverity.WARNING) == ["Input pin is the target of 2 connections"]


def test_connected_flag_disagreement(graph):
    blocks, pins, _ = graph
    flagged = [pins[0].model_copy(update={"connected": True})] + pins[1:]

    issues = validate_graph(blocks, flagged, [])

    assert [i.pin_id for i in issues] == ["a.out"]
    summary = validation_summary(issues)
    assert summary["warnings"] == 1
    assert summary["valid"]
