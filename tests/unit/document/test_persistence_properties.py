"""
Property-based tests for the load -> reconcile -> render -> persist cycle.

Uses Hypothesis to check the round-trip, preservation, idempotence and
disable-removes properties over arbitrary registries and documents.
"""

import tempfile
from pathlib import Path

from hypothesis import given, settings, strategies as st

from linuxblox.constants import FLAGS_OBJECT_KEY
from linuxblox.document import ConfigDocumentLoader, ConfigDocumentWriter, OutcomeKind, Reconciler

from tests.strategies import registries, unrelated_documents


def _save_and_reload(document, registry):
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "nested" / "config.json"
        writer = ConfigDocumentWriter()
        writer.persist(path, writer.render(document, registry))
        loaded, outcome = ConfigDocumentLoader.load(path)
    assert outcome.kind is OutcomeKind.LOADED
    return loaded


@given(registries(), unrelated_documents())
@settings(deadline=None, max_examples=75)
def test_round_trip_reproduces_enabled_flags(registry, document):
    expected = {d.as_tuple() for d in registry if d.enabled}

    loaded = _save_and_reload(document, registry)
    Reconciler().apply(loaded, registry)

    assert {d.as_tuple() for d in registry if d.enabled} == expected


@given(registries(), unrelated_documents())
@settings(deadline=None, max_examples=75)
def test_unrelated_keys_preserved(registry, document):
    loaded = _save_and_reload(document, registry)

    assert {k: v for k, v in loaded.items() if k != FLAGS_OBJECT_KEY} == document
    assert list(loaded)[: len(document)] == list(document)


@given(registries(), st.data())
@settings(deadline=None)
def test_apply_is_idempotent(registry, data):
    values = st.one_of(st.booleans(), st.text(max_size=8), st.integers())
    managed = data.draw(st.lists(st.sampled_from(registry.names()), unique=True))
    flags = {name: data.draw(values) for name in managed}
    flags.update(data.draw(st.dictionaries(st.text(max_size=8), values, max_size=3)))
    document = {FLAGS_OBJECT_KEY: flags}
    Reconciler().apply(document, registry)
    first = [d.as_tuple() for d in registry]
    Reconciler().apply(document, registry)
    assert [d.as_tuple() for d in registry] == first


@given(registries(), st.data())
@settings(deadline=None)
def test_disabled_flags_never_rendered(registry, data):
    writer = ConfigDocumentWriter()
    rendered = writer.render({}, registry)
    name = data.draw(st.sampled_from(registry.names()))
    registry.set_enabled(name, False)

    flags = writer.render(rendered, registry)[FLAGS_OBJECT_KEY]

    assert name not in flags
    assert set(flags) == {d.name for d in registry if d.enabled}
