#!/usr/bin/env python3
"""Flow canvas CLI - replay recorded pointer gestures against a Viewport."""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, ValidationError

from .callbacks import HostCallbacks
from .config import ViewportConfig
from .errors import ScriptError
from .events import PointerEvent
from .models import Block, Connection, Pin
from .validation import validate_graph, validation_summary
from .viewport import Viewport

logger = logging.getLogger(__name__)


def _json_out(data):
    print(json.dumps(data))
    sys.exit(0)


def _to_json(value):
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


def _load_script(path):
    """Read a replay script, raising ScriptError for anything unusable."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ScriptError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ScriptError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ScriptError(f"{path} must contain a JSON object")
    return data


def _parse_graph(data):
    try:
        blocks = [Block(**b) for b in data.get("blocks", [])]
        pins = [Pin(**p) for p in data.get("pins", [])]
        connections = [Connection(**c) for c in data.get("connections", [])]
    except ValidationError as e:
        raise ScriptError(f"Invalid graph: {e}") from e
    return blocks, pins, connections


class _Recorder:
    """HostCallbacks whose every handler appends to a call log."""

    def __init__(self):
        self.calls = []
        self.callbacks = HostCallbacks(**{
            name: self._handler(name) for name in HostCallbacks.names()
        })

    def _handler(self, name):
        def record(*args):
            self.calls.append({"callback": name, "args": [_to_json(a) for a in args]})
        return record


def replay(script):
    """
    Replay a script and return the recorded callbacks and final snapshot.

    Args:
        script: Parsed script document

    Returns:
        Dictionary with "callbacks", "trace" and "snapshot" entries
    """
    size = list(script.get("size", [800, 600]))
    try:
        config = ViewportConfig.from_env(**script.get("config", {}))
    except ValidationError as e:
        raise ScriptError(f"Invalid config: {e}") from e

    recorder = _Recorder()
    blocks, pins, connections = _parse_graph(script.get("graph", {}))
    viewport = Viewport(
        measure=lambda: (size[0], size[1]),
        callbacks=recorder.callbacks,
        config=config,
        blocks=blocks,
        pins=pins,
        connections=connections,
    )

    trace = []
    for index, event in enumerate(script.get("events", [])):
        kind = event.get("type")
        try:
            if kind in ("down", "move", "up"):
                pointer = PointerEvent(**{k: v for k, v in event.items() if k != "type"})
                getattr(viewport, f"pointer_{kind}")(pointer)
            elif kind == "cancel":
                viewport.cancel()
            elif kind == "wheel":
                viewport.wheel(event.get("delta_y", 0), event.get("zoom", False), event.get("delta_x", 0))
            elif kind == "key":
                viewport.key_press(event["key"], event.get("ctrl", False))
            elif kind == "resize":
                size[:] = event["size"]
                viewport.resize()
            elif kind == "zoom":
                viewport.set_zoom(event["level"])
            elif kind == "scroll":
                viewport.scroll_to(event.get("left"), event.get("top"))
            elif kind == "graph":
                viewport.update_graph(*_parse_graph(event))
            else:
                raise ScriptError(f"Event {index}: unknown type {kind!r}")
        except (KeyError, ValidationError) as e:
            raise ScriptError(f"Event {index} ({kind}): {e}") from e
        logger.debug("event %d (%s) -> %s", index, kind, viewport.interaction.kind)
        trace.append({"event": index, "interaction": viewport.interaction.kind})

    return {
        "callbacks": recorder.calls,
        "trace": trace,
        "snapshot": viewport.snapshot().model_dump(mode="json"),
    }


# ── Commands ─────────────────────────────────────────────────────────────────

def cmd_replay(args):
    try:
        result = replay(_load_script(args.script))
    except ScriptError as e:
        _json_out({"status": "error", "error": str(e)})
    if not args.trace:
        result.pop("trace")
    _json_out({"status": "ok", **result})


def cmd_validate(args):
    try:
        blocks, pins, connections = _parse_graph(_load_script(args.script).get("graph", {}))
    except ScriptError as e:
        _json_out({"status": "error", "error": str(e)})
    issues = validate_graph(blocks, pins, connections)
    _json_out({
        "status": "ok",
        "issues": [i.to_dict() for i in issues],
        "summary": validation_summary(issues),
    })


def main(argv=None):
    parser = argparse.ArgumentParser(prog="flowcanvas", description="Flow canvas interaction tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log gesture handling to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("replay", help="Replay a gesture script")
    p.add_argument("script")
    p.add_argument("--trace", action="store_true", help="Include the per-event interaction state")

    p = sub.add_parser("validate", help="Validate a script's graph")
    p.add_argument("script")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cmd_map = {
        "replay": cmd_replay,
        "validate": cmd_validate,
    }
    cmd_map[args.command](args)


if __name__ == "__main__":
    main()
