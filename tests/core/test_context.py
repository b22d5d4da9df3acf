# tests/core/test_context.py
"""
Testes do MigrationContext.

Os testes asseguram que:
- o buffer de eventos respeita `logging.max_events` e retém os mais recentes
- warnings por escopo usam o mesmo limite
- `drain_events` entrega os eventos e esvazia o buffer
- um engine de longa duração não acumula eventos além do limite
"""

from paramvault.core.config.defaults import DEFAULT_MAX_EVENTS, default_settings
from paramvault.core.context import MigrationContext
from paramvault.core.engine import create_engine
from paramvault.core.model import ConfigurationMetadata, StoredConfiguration


def _ctx(max_events):
    settings = default_settings()
    settings["logging"]["max_events"] = max_events
    return MigrationContext.create(settings=settings, run_id="run-1")


def test_default_event_limit():
    ctx = MigrationContext.create()
    assert ctx.max_events == DEFAULT_MAX_EVENTS
    assert ctx.events.maxlen == DEFAULT_MAX_EVENTS


def test_events_are_capped_keeping_newest():
    ctx = _ctx(3)

    for i in range(5):
        ctx.log(scope="engine", level="info", message=f"event {i}")

    assert len(ctx.events) == 3
    assert [e["message"] for e in ctx.events] == ["event 2", "event 3", "event 4"]
    assert ctx.events[0]["run_id"] == "run-1"


def test_warnings_per_scope_are_capped():
    ctx = _ctx(2)

    for i in range(4):
        ctx.add_warning(scope="openai", message=f"warning {i}")

    assert list(ctx.warnings["openai"]) == ["warning 2", "warning 3"]
    assert len(ctx.events) == 2


def test_drain_events_returns_and_clears():
    ctx = _ctx(10)
    ctx.log(scope="engine", level="info", message="first")
    ctx.log(scope="backup", level="info", message="second")

    drained = ctx.drain_events()

    assert [e["message"] for e in drained] == ["first", "second"]
    assert len(ctx.events) == 0
    assert ctx.events_for("engine") == []

    ctx.log(scope="engine", level="info", message="third")
    assert [e["message"] for e in ctx.events_for("engine")] == ["third"]


def test_long_lived_engine_keeps_bounded_event_log(tmp_path, clock):
    engine = create_engine(root=tmp_path, settings={"logging": {"max_events": 4}}, clock=clock)
    engine.initialize()

    for i in range(10):
        stored = StoredConfiguration(
            config={"headerConfigs": {"X": str(i)}, "bodyConfigs": {}},
            metadata=ConfigurationMetadata(),
        )
        engine.migrate_configurations({f"p{i}": stored})

    assert len(engine.ctx.events) == 4
