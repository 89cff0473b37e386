import pytest
import yaml

from waypoint.core.config import LoaderConfig
from waypoint.core.exceptions import LoaderDataError
from waypoint.core.state import YamlLoader

from helpers.machines import CountingConsumer, PatternMachine

DOCUMENT = {
    "transitions": [
        {"from": "regex:^(new|active)$", "to": "cancelled", "action": "notify_cancel"},
        {"from": "new", "to": "active", "guard": "can_activate"},
        {"from": "active", "to": "done", "description": "Work finished", "payload": {"sla": 3}},
        {"from": "new", "to": "active", "guard": "can_activate_v2"},
    ]
}


def test_load_from_path_orders_and_deduplicates(tmp_path):
    path = tmp_path / "transitions.yaml"
    path.write_text(yaml.safe_dump(DOCUMENT), encoding="utf-8")
    consumer = CountingConsumer()

    total = YamlLoader.from_path(path).load(consumer)

    assert total == 3
    assert consumer.names == ["new_to_active", "active_to_done", "regex:^(new|active)$_to_cancelled"]
    assert consumer.calls[0].guard == "can_activate_v2"


def test_transitions_carry_opaque_payload():
    transitions = YamlLoader(DOCUMENT).transitions()
    done = transitions[2]
    assert done.description == "Work finished"
    assert done.payload == {"sla": 3}
    assert transitions[0].action == "notify_cancel"
    assert transitions[0].origin.is_pattern
    assert not transitions[0].destination.is_pattern


def test_equal_state_names_share_one_instance():
    transitions = YamlLoader(DOCUMENT).transitions()
    assert transitions[1].destination is transitions[2].origin
    assert transitions[1].origin is transitions[3].origin


def test_pattern_machine_expands_yaml_patterns():
    machine = PatternMachine()
    total = YamlLoader(DOCUMENT).load(machine)
    # new->active, active->done, then new->cancelled and active->cancelled
    assert total == 4
    assert set(machine.transitions) == {
        "new_to_active",
        "active_to_done",
        "new_to_cancelled",
        "active_to_cancelled",
    }


def test_custom_pattern_prefixes_from_config():
    config = LoaderConfig({"states": {"pattern_prefixes": ["glob:"]}}, environ={})
    loader = YamlLoader.from_string(
        "transitions:\n  - {from: 'glob:*', to: b}\n  - {from: 'regex:a', to: b}\n",
        config=config,
    )
    first, second = loader.transitions()
    assert first.is_pattern_based
    assert not second.is_pattern_based


def test_pattern_prefixes_from_environment(monkeypatch):
    monkeypatch.setenv("WAYPOINT_STATES__PATTERN_PREFIXES", '["glob:"]')
    loader = YamlLoader.from_string("transitions:\n  - {from: 'glob:*', to: b}\n")
    assert loader.transitions()[0].is_pattern_based


def test_empty_transition_list_loads_nothing():
    consumer = CountingConsumer()
    assert YamlLoader.from_string("transitions: []\n").load(consumer) == 0
    assert consumer.calls == []


@pytest.mark.parametrize(
    "text",
    [
        "",
        "transitions: {}\n",
        "transitions:\n  - {from: a}\n",
        "transitions:\n  - {from: a, to: b, colour: red}\n",
        "transitions:\n  - {from: '', to: b}\n",
        "transitions:\n  - {from: a, to: b, payload: [1, 2]}\n",
        "states: []\n",
    ],
)
def test_invalid_documents_are_rejected(text):
    with pytest.raises(LoaderDataError) as excinfo:
        YamlLoader.from_string(text)
    assert excinfo.value.context["schema"] == "transitions.schema.yaml"
    assert excinfo.value.context["errors"]


def test_unparsable_yaml_is_rejected():
    with pytest.raises(LoaderDataError, match="Invalid YAML"):
        YamlLoader.from_string("transitions: [unclosed\n")


def test_missing_file_is_rejected(tmp_path):
    with pytest.raises(LoaderDataError) as excinfo:
        YamlLoader.from_path(tmp_path / "missing.yaml")
    assert excinfo.value.context["path"].endswith("missing.yaml")


def test_undecodable_file_is_rejected(tmp_path):
    path = tmp_path / "binary.yaml"
    path.write_bytes(b"transitions:\n  - {from: \xff\xfe, to: b}\n")
    with pytest.raises(LoaderDataError, match="Cannot read") as excinfo:
        YamlLoader.from_path(path)
    assert excinfo.value.context["path"] == str(path)


def test_directory_path_is_rejected(tmp_path):
    with pytest.raises(LoaderDataError) as excinfo:
        YamlLoader.from_path(tmp_path)
    assert excinfo.value.context["path"] == str(tmp_path)
