import json

import pytest

from cgminer_api.models.command import APICommand


def test_empty_parameter_is_omitted():
    cmd = APICommand("summary")
    assert cmd.to_dict() == {"command": "summary"}
    assert b"parameter" not in cmd.encode()


def test_parameter_is_sent_verbatim():
    cmd = APICommand("gpu", "0")
    assert json.loads(cmd.encode()) == {"command": "gpu", "parameter": "0"}


def test_parameter_with_separators_is_untouched():
    cmd = APICommand("addpool", "stratum+tcp://pool:3333,user,pass")
    assert json.loads(cmd.encode())["parameter"] == "stratum+tcp://pool:3333,user,pass"


def test_method_is_required():
    with pytest.raises(ValueError):
        APICommand("")


def test_command_is_immutable():
    cmd = APICommand("summary")
    with pytest.raises(AttributeError):
        cmd.method = "devs"
