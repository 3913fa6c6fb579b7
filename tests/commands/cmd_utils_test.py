import argparse
import logging
from unittest import mock

import pytest

from stategraph.commands import cmd_utils


class TestBuildOptionParser:
    def test_verbose_count(self):
        parser = cmd_utils.build_option_parser()
        assert parser.parse_args([]).verbose is None
        assert parser.parse_args(['-vv']).verbose == 2

    def test_version(self, capsys):
        parser = cmd_utils.build_option_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(['--version'])
        assert cmd_utils.stategraph.__version__ in capsys.readouterr().out


class TestSetupLogging:
    @pytest.mark.parametrize(
        'verbose,level', [
            (None, logging.CRITICAL),
            (1, logging.WARNING),
            (2, logging.INFO),
            (3, logging.NOTSET),
        ],
    )
    def test_setup_logging(self, verbose, level):
        options = argparse.Namespace(verbose=verbose)
        with mock.patch('stategraph.commands.cmd_utils.logging.basicConfig', autospec=True) as mock_config:
            cmd_utils.setup_logging(options)
        assert mock_config.call_args[1]['level'] == level
