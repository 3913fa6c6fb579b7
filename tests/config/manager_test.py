import textwrap

import pytest

from stategraph.config import ConfigError
from stategraph.config import manager

MACHINE = textwrap.dedent("""
    rankdir: TB
    initial: Idle
    states:
      - Idle
      - name: Active
        last_child: Running
        states: [Running, Paused]
    transitions:
      Idle: {start: Active}
      Active: {stop: Idle}
""")


class TestManager:
    @pytest.fixture(autouse=True)
    def setup_config_file(self, tmp_path):
        self.path = tmp_path / 'machine.yaml'
        self.path.write_text(MACHINE)

    def test_from_string(self):
        assert manager.from_string("states: [Idle]") == dict(states=['Idle'])

    def test_from_string_invalid(self):
        with pytest.raises(ConfigError, match="Invalid config format"):
            manager.from_string("states: [Idle")

    def test_read(self):
        content = manager.read(str(self.path))
        assert content['initial'] == 'Idle'
        assert content['transitions'] == {'Idle': {'start': 'Active'}, 'Active': {'stop': 'Idle'}}

    def test_load(self):
        config = manager.load(str(self.path))
        assert config.rankdir == 'TB'
        assert [state.name for state in config.states] == ['Idle', 'Active']
        assert [(t.source, t.trigger, t.destination) for t in config.transitions] == [
            ('Idle', 'start', 'Active'),
            ('Active', 'stop', 'Idle'),
        ]

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to read"):
            manager.load(str(tmp_path / 'missing.yaml'))

    def test_load_invalid_config(self):
        self.path.write_text("states: []\n")
        with pytest.raises(ConfigError, match="Required non-empty list"):
            manager.load(str(self.path))
